"""
EditMatch — Selections API

Endpoints for recording the artwork styles and niches the matching engine
reads.  ``account_type`` chooses between the requester and creator rules.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from editmatch.database import get_db
from editmatch.models.user import ACCOUNT_TYPE_CREATOR, ACCOUNT_TYPE_USER
from editmatch.schemas.selection import (
    NicheSelectionRequest,
    SelectionResponse,
    StyleSelectionRequest,
)
from editmatch.services.selection_service import SelectionService

logger = structlog.get_logger("editmatch.api.selections")

router = APIRouter()

_selection_service: SelectionService | None = None


def _get_selection_service() -> SelectionService:
    global _selection_service
    if _selection_service is None:
        _selection_service = SelectionService()
    return _selection_service


def _invalid_account_type() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail='Invalid account_type. Must be "user" or "creator"',
    )


# ──────────────────────────────────────────────────────────────────────────────
# POST /styles — Record artwork style selection
# ──────────────────────────────────────────────────────────────────────────────

@router.post(
    "/styles",
    response_model=SelectionResponse,
    summary="Record artwork style selection",
)
async def save_style_selection(
    payload: StyleSelectionRequest,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Requesters submit exactly one style for a project; creators submit
    one to three styles."""
    log = logger.bind(user_id=str(payload.user_id), account_type=payload.account_type)
    log.info("save_style_selection")

    service = _get_selection_service()

    if payload.account_type == ACCOUNT_TYPE_USER:
        if payload.project_id is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="project_id is required for user",
            )
        if len(payload.styles) != 1:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="styles should contain exactly one element for user",
            )
        return await service.save_requester_style(
            user_id=payload.user_id,
            project_id=payload.project_id,
            style_id=payload.styles[0],
            db_session=db,
        )

    if payload.account_type == ACCOUNT_TYPE_CREATOR:
        if not 1 <= len(payload.styles) <= service.MAX_CREATOR_STYLES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="styles should contain 1-3 items for creator",
            )
        return await service.save_creator_styles(
            user_id=payload.user_id,
            style_ids=payload.styles,
            db_session=db,
        )

    raise _invalid_account_type()


# ──────────────────────────────────────────────────────────────────────────────
# POST /niches — Record niche selection
# ──────────────────────────────────────────────────────────────────────────────

@router.post(
    "/niches",
    response_model=SelectionResponse,
    summary="Record niche selection",
)
async def save_niche_selection(
    payload: NicheSelectionRequest,
    db: AsyncSession = Depends(get_db),
) -> dict:
    log = logger.bind(user_id=str(payload.user_id), account_type=payload.account_type)
    log.info("save_niche_selection")

    service = _get_selection_service()

    if payload.account_type not in (ACCOUNT_TYPE_USER, ACCOUNT_TYPE_CREATOR):
        raise _invalid_account_type()

    if not payload.niche:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="niche is required",
        )

    if payload.account_type == ACCOUNT_TYPE_USER:
        if payload.project_id is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="project_id is required for user",
            )
        return await service.save_requester_niche(
            user_id=payload.user_id,
            project_id=payload.project_id,
            niche=payload.niche,
            db_session=db,
        )

    return await service.save_creator_niche(
        user_id=payload.user_id,
        niche=payload.niche,
        db_session=db,
    )
