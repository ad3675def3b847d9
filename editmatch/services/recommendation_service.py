"""
EditMatch — Recommendation orchestration.

Two read-only recommendation flows:

  * Candidates for a project — load the project owner's stored style and
    niche, snapshot every active creator, and rank them with the EMC
    scoring engine (``editmatch.services.match_engine``).
  * Projects for a freelancer — match open project categories against the
    freelancer's superpowers (case-insensitive exact match).

Nothing is cached or written; each call works from its own fresh snapshot.
"""

from __future__ import annotations

import json
import uuid
from typing import Any, Iterable

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from editmatch.exceptions import ForbiddenError, NotFoundError, ValidationFailedError
from editmatch.models.user import (
    ACCOUNT_TYPE_CREATOR,
    CREATOR_TYPE_EDITOR,
    CREATOR_TYPE_VIDEOGRAPHER,
    User,
)
from editmatch.services import match_engine, queries

logger = structlog.get_logger("editmatch.recommendation_service")

FREELANCER_ROLE_LABELS: dict[str, str] = {
    CREATOR_TYPE_EDITOR: "Video Editor",
    CREATOR_TYPE_VIDEOGRAPHER: "Videographer",
}

PROJECT_MATCH_SCORE = 100


def _parse_superpowers(raw: Any) -> list[str]:
    """Normalise a stored superpowers value (list, JSON string, bare string)."""
    if not raw:
        return []
    if isinstance(raw, list):
        return [str(s) for s in raw]
    if isinstance(raw, str):
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            return [raw]
        if isinstance(parsed, list):
            return [str(s) for s in parsed]
        return [raw]
    return []


def _matching_superpower(category: str | None, superpowers: Iterable[str]) -> str | None:
    normalised = (category or "").strip().lower()
    for superpower in superpowers:
        if normalised == superpower.strip().lower():
            return superpower
    return None


class RecommendationService:
    """Read-only recommendation flows over the marketplace tables."""

    async def get_recommended_candidates(
        self,
        project_id: uuid.UUID,
        db_session: AsyncSession,
    ) -> list[match_engine.MatchResult]:
        """Rank every active creator for the owner of ``project_id``.

        Raises
        ------
        NotFoundError
            If the project or its owner does not exist.
        ValidationFailedError
            If the owner has no artwork style or no niche recorded.
        """
        log = logger.bind(project_id=str(project_id))
        log.info("recommend_candidates_start")

        project = await queries.get_project(db_session, project_id, include_deleted=True)
        if project is None:
            raise NotFoundError("Project not found")

        owner = await queries.get_user(db_session, project.owner_id)
        if owner is None:
            raise NotFoundError("User not found")

        requester = self._build_requester(owner)
        if requester.style_id is None or not requester.niche:
            log.info("requester_selection_missing", user_id=str(owner.id))
            raise ValidationFailedError("User missing artwork or niche")

        creators = await queries.list_active_creators(db_session)
        candidates = [self._build_candidate(c) for c in creators]

        ranked = match_engine.rank(requester, candidates)

        log.info(
            "recommend_candidates_complete",
            requester_id=str(owner.id),
            candidate_count=len(ranked),
        )
        return ranked

    async def get_recommended_projects(
        self,
        user_id: uuid.UUID,
        db_session: AsyncSession,
    ) -> dict:
        """List open projects with those matching the freelancer's
        superpowers first.

        Returns
        -------
        dict
            ``{"data": [...], "meta": {...}}`` — ``data`` sorted by
            ``match_score`` descending, then newest first.
        """
        log = logger.bind(user_id=str(user_id))
        log.info("recommend_projects_start")

        user = await queries.get_user(db_session, user_id)
        if user is None:
            raise NotFoundError("User not found")

        if (
            user.account_type != ACCOUNT_TYPE_CREATOR
            or user.creator_type not in FREELANCER_ROLE_LABELS
        ):
            raise ForbiddenError(
                "This feature is only available for Video Editors and Videographers"
            )

        profile = await queries.get_freelancer_profile(db_session, user_id)
        if profile is None:
            raise NotFoundError(
                "Freelancer profile not found. Please complete your profile setup."
            )

        superpowers = _parse_superpowers(profile.superpowers)
        projects = await queries.list_open_projects(db_session)

        scored: list[dict] = []
        for project in projects:
            matched = _matching_superpower(project.category, superpowers)
            match_score = PROJECT_MATCH_SCORE if matched is not None else 0
            scored.append(
                {
                    "project_id": project.id,
                    "owner_id": project.owner_id,
                    "title": project.title,
                    "category": project.category,
                    "status": project.status,
                    "created_at": project.created_at,
                    "match_score": match_score,
                    "is_recommended": match_score > 0,
                    "matched_category": matched,
                }
            )

        scored.sort(
            key=lambda p: (p["match_score"], p["created_at"]),
            reverse=True,
        )

        recommended_count = sum(1 for p in scored if p["is_recommended"])
        log.info(
            "recommend_projects_complete",
            total_projects=len(scored),
            recommended_count=recommended_count,
        )

        return {
            "data": scored,
            "meta": {
                "total_projects": len(scored),
                "recommended_count": recommended_count,
                "freelancer_superpowers": superpowers,
                "user_role": FREELANCER_ROLE_LABELS[user.creator_type],
            },
        }

    # ── Row -> engine value conversion ───────────────────────────────────

    @staticmethod
    def _build_requester(user: User) -> match_engine.Requester:
        # Requesters store a single style as a one-element list.
        style_ids = match_engine.parse_style_ids(user.artworks)
        return match_engine.Requester(
            user_id=user.id,
            style_id=style_ids[0] if style_ids else None,
            niche=user.niche,
        )

    @staticmethod
    def _build_candidate(user: User) -> match_engine.Candidate:
        return match_engine.Candidate(
            id=user.id,
            style_ids=frozenset(match_engine.parse_style_ids(user.artworks)),
            niche=user.niche,
        )
