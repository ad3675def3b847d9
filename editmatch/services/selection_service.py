"""
EditMatch — Style and niche selection writes.

Records the inputs the EMC scoring engine reads:

  * requesters pick exactly one artwork style and one niche per project;
  * creators pick one to three artwork styles and one niche.

Niches are validated against the administrator-maintained ``niches``
vocabulary before being stored.  Re-submitting a selection that is already
recorded is a conflict, not a no-op.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from editmatch.exceptions import ConflictError, NotFoundError, ValidationFailedError
from editmatch.models.user import ACCOUNT_TYPE_CREATOR, ACCOUNT_TYPE_USER, User
from editmatch.services import match_engine, queries

logger = structlog.get_logger("editmatch.selection_service")


class SelectionService:
    """Validate and persist artwork-style and niche selections."""

    MIN_CREATOR_STYLES: int = 1
    MAX_CREATOR_STYLES: int = 3

    # ── Niche vocabulary ────────────────────────────────────────────────

    async def list_valid_niches(
        self,
        db_session: AsyncSession,
        niche_type: str | None = None,
    ) -> list[str]:
        return await queries.list_valid_niches(db_session, niche_type)

    async def _require_valid_niche(
        self,
        niche: str,
        db_session: AsyncSession,
        niche_type: str | None = None,
    ) -> None:
        valid = await self.list_valid_niches(db_session, niche_type)
        if niche not in valid:
            raise ValidationFailedError(
                f"Enter valid niche. Valid niches are: {', '.join(valid)}"
            )

    # ── Artwork styles ──────────────────────────────────────────────────

    async def save_requester_style(
        self,
        user_id: uuid.UUID,
        project_id: uuid.UUID,
        style_id: int,
        db_session: AsyncSession,
    ) -> dict:
        """Store the single artwork style a requester chose for a project.

        Raises
        ------
        NotFoundError
            If the project is missing, deleted or owned by someone else, or
            the user is not a requester account.
        ConflictError
            If ``style_id`` is already the requester's recorded style.
        """
        log = logger.bind(user_id=str(user_id), project_id=str(project_id))
        log.info("save_requester_style_start", style_id=style_id)

        await self._require_owned_project(user_id, project_id, db_session)

        user = await queries.get_user(db_session, user_id, account_type=ACCOUNT_TYPE_USER)
        if user is None:
            raise NotFoundError("User not found")

        if style_id in self._stored_styles(user):
            raise ConflictError("Artwork already added for this user")

        user.artworks = [style_id]
        self._touch(user)
        await db_session.flush()

        log.info("save_requester_style_complete")
        return {"success": True, "message": "Artwork updated for user successfully"}

    async def save_creator_styles(
        self,
        user_id: uuid.UUID,
        style_ids: list[int],
        db_session: AsyncSession,
    ) -> dict:
        """Store the one-to-three artwork styles a creator offers."""
        log = logger.bind(user_id=str(user_id))
        log.info("save_creator_styles_start", style_ids=style_ids)

        if not self.MIN_CREATOR_STYLES <= len(style_ids) <= self.MAX_CREATOR_STYLES:
            raise ValidationFailedError(
                f"Artworks must contain {self.MIN_CREATOR_STYLES}-"
                f"{self.MAX_CREATOR_STYLES} items"
            )

        creator = await self._require_active_creator(user_id, db_session)

        stored = self._stored_styles(creator)
        duplicates = [s for s in style_ids if s in stored]
        if duplicates:
            raise ConflictError(
                f"Artworks already added: {', '.join(str(d) for d in duplicates)}"
            )

        creator.artworks = list(style_ids)
        self._touch(creator)
        await db_session.flush()

        log.info("save_creator_styles_complete")
        return {"success": True, "message": "Artworks updated for creator successfully"}

    # ── Niches ──────────────────────────────────────────────────────────

    async def save_requester_niche(
        self,
        user_id: uuid.UUID,
        project_id: uuid.UUID,
        niche: str,
        db_session: AsyncSession,
    ) -> dict:
        log = logger.bind(user_id=str(user_id), project_id=str(project_id))
        log.info("save_requester_niche_start", niche=niche)

        await self._require_valid_niche(niche, db_session)
        await self._require_owned_project(user_id, project_id, db_session)

        user = await queries.get_user(db_session, user_id, account_type=ACCOUNT_TYPE_USER)
        if user is None:
            raise NotFoundError("User not found")

        if user.niche == niche:
            raise ConflictError("Niche already added for this user")

        user.niche = niche
        self._touch(user)
        await db_session.flush()

        log.info("save_requester_niche_complete")
        return {"success": True, "message": "Niche updated for user successfully"}

    async def save_creator_niche(
        self,
        user_id: uuid.UUID,
        niche: str,
        db_session: AsyncSession,
    ) -> dict:
        """Store a creator's niche, checked against their own creator type's
        vocabulary when one is set."""
        log = logger.bind(user_id=str(user_id))
        log.info("save_creator_niche_start", niche=niche)

        creator = await self._require_active_creator(user_id, db_session)
        await self._require_valid_niche(niche, db_session, creator.creator_type)

        if creator.niche == niche:
            raise ConflictError("Niche already added for this creator")

        creator.niche = niche
        self._touch(creator)
        await db_session.flush()

        log.info("save_creator_niche_complete")
        return {"success": True, "message": "Niche updated for creator successfully"}

    # ── Helpers ─────────────────────────────────────────────────────────

    async def _require_owned_project(
        self,
        user_id: uuid.UUID,
        project_id: uuid.UUID,
        db_session: AsyncSession,
    ) -> None:
        project = await queries.get_project(db_session, project_id, owner_id=user_id)
        if project is None:
            raise NotFoundError("Project not found or doesn't belong to the user")

    async def _require_active_creator(
        self,
        user_id: uuid.UUID,
        db_session: AsyncSession,
    ) -> User:
        creator = await queries.get_user(
            db_session, user_id, account_type=ACCOUNT_TYPE_CREATOR, active_only=True
        )
        if creator is None:
            raise NotFoundError("Creator not found")
        return creator

    @staticmethod
    def _stored_styles(user: User) -> set[int]:
        return set(match_engine.parse_style_ids(user.artworks))

    @staticmethod
    def _touch(user: User) -> None:
        user.updated_at = datetime.now(timezone.utc)
