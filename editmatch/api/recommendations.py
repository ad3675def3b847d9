"""
EditMatch — Recommendations API

Endpoints for ranking creators against a project and for listing open
projects that suit a freelancer.
"""

from __future__ import annotations

import uuid

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from editmatch.database import get_db
from editmatch.schemas.match import MatchResultItem, RecommendedProjectsResponse
from editmatch.services.recommendation_service import RecommendationService

logger = structlog.get_logger("editmatch.api.recommendations")

router = APIRouter()

# ── Service singleton ─────────────────────────────────────────────────────────

_recommendation_service: RecommendationService | None = None


def _get_recommendation_service() -> RecommendationService:
    global _recommendation_service
    if _recommendation_service is None:
        _recommendation_service = RecommendationService()
    return _recommendation_service


# ──────────────────────────────────────────────────────────────────────────────
# GET /candidates/{project_id} — Ranked creators for a project
# ──────────────────────────────────────────────────────────────────────────────

@router.get(
    "/candidates/{project_id}",
    response_model=list[MatchResultItem],
    summary="Rank creators for a project",
)
async def get_recommended_candidates(
    project_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> list[MatchResultItem]:
    """Return every active creator scored against the project owner's
    artwork style and niche, best match first.

    Fails with 404 when the project or its owner is missing and with 400
    when the owner has not recorded both a style and a niche.
    """
    ranked = await _get_recommendation_service().get_recommended_candidates(
        project_id=project_id,
        db_session=db,
    )
    return [MatchResultItem.model_validate(r) for r in ranked]


# ──────────────────────────────────────────────────────────────────────────────
# GET /projects/{user_id} — Open projects for a freelancer
# ──────────────────────────────────────────────────────────────────────────────

@router.get(
    "/projects/{user_id}",
    response_model=RecommendedProjectsResponse,
    summary="Recommend open projects to a freelancer",
)
async def get_recommended_projects(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> RecommendedProjectsResponse:
    """Projects whose category matches one of the freelancer's superpowers
    are listed first; the rest follow, newest first."""
    result = await _get_recommendation_service().get_recommended_projects(
        user_id=user_id,
        db_session=db,
    )
    return RecommendedProjectsResponse.model_validate(result)
