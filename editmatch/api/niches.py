"""
EditMatch — Niche vocabulary API
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from editmatch.api.selections import _get_selection_service
from editmatch.database import get_db
from editmatch.schemas.selection import NicheType

router = APIRouter()


@router.get(
    "/",
    response_model=list[str],
    summary="List valid niches",
)
async def list_niches(
    niche_type: Optional[NicheType] = Query(None, description="editor or videographer"),
    db: AsyncSession = Depends(get_db),
) -> list[str]:
    """Active niche names, optionally restricted to one creator type."""
    return await _get_selection_service().list_valid_niches(db, niche_type)
