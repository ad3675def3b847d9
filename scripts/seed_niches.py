"""Seed the editor and videographer niche vocabularies into the niches table."""
import asyncio
import sys
sys.path.insert(0, ".")

from sqlalchemy import select
from editmatch.database import async_session_factory
from editmatch.models.niche import Niche


EDITOR_NICHES = [
    "ShortFormReels", "CorporateAV", "Documentary", "EventHighlight", "WeddingFilm",
    "CommercialAd", "MusicVideo", "NarrativeFilm", "VFXCompositing", "MotionGraphics",
    "GamingEsports", "SportsHighlight", "eLearning", "RealEstate", "Colourist",
]

VIDEOGRAPHER_NICHES = [
    "RunAndGunSocial", "CorporateInterview", "DocumentaryField", "WeddingCine", "EventCoverage",
    "ProductShooter", "MusicVideoDP", "SportsAction", "DroneOperator", "RealEstateCine",
    "FashionBeauty", "MultiCamLive", "Wildlife", "HighSpeedSpecialist", "VR360",
]


def niche_rows() -> list[dict]:
    rows = [
        {"name": n, "niche_type": "editor", "description": f"{n} editing services"}
        for n in EDITOR_NICHES
    ]
    rows += [
        {"name": n, "niche_type": "videographer", "description": f"{n} videography services"}
        for n in VIDEOGRAPHER_NICHES
    ]
    return rows


async def seed():
    async with async_session_factory() as session:
        for row in niche_rows():
            existing = await session.execute(
                select(Niche).where(Niche.name == row["name"])
            )
            if existing.scalar_one_or_none() is None:
                session.add(Niche(**row))
                print(f"  Seeded niche {row['name']} ({row['niche_type']})")
            else:
                print(f"  Niche {row['name']} already exists, skipping.")
        await session.commit()
    print("Done seeding niches.")


if __name__ == "__main__":
    asyncio.run(seed())
