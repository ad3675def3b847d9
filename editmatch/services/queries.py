"""
EditMatch — Read queries shared by the recommendation and selection services.

Thin async helpers over SQLAlchemy ``select``; each takes the caller's
session and returns ORM rows (or ``None`` when nothing matches).
"""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from editmatch.models.freelancer import FreelancerProfile
from editmatch.models.niche import Niche
from editmatch.models.project import PROJECT_STATUS_OPEN, Project
from editmatch.models.user import ACCOUNT_TYPE_CREATOR, User


async def get_project(
    db_session: AsyncSession,
    project_id: uuid.UUID,
    owner_id: uuid.UUID | None = None,
    include_deleted: bool = False,
) -> Project | None:
    """Fetch a project by id, optionally requiring a given owner.

    Soft-deleted projects are skipped unless ``include_deleted`` is set.
    """
    stmt = select(Project).where(Project.id == project_id)
    if not include_deleted:
        stmt = stmt.where(Project.is_deleted.is_(False))
    if owner_id is not None:
        stmt = stmt.where(Project.owner_id == owner_id)
    result = await db_session.execute(stmt)
    return result.scalar_one_or_none()


async def get_user(
    db_session: AsyncSession,
    user_id: uuid.UUID,
    account_type: str | None = None,
    active_only: bool = False,
) -> User | None:
    stmt = select(User).where(User.id == user_id)
    if account_type is not None:
        stmt = stmt.where(User.account_type == account_type)
    if active_only:
        stmt = stmt.where(User.is_active.is_(True))
    result = await db_session.execute(stmt)
    return result.scalar_one_or_none()


async def list_active_creators(db_session: AsyncSession) -> list[User]:
    """All active, non-banned creators in a stable fetch order.

    The ordering (oldest account first, then id) is what the ranking
    preserves between equal scores.
    """
    stmt = (
        select(User)
        .where(
            User.account_type == ACCOUNT_TYPE_CREATOR,
            User.is_active.is_(True),
            User.is_banned.is_(False),
        )
        .order_by(User.created_at.asc(), User.id.asc())
    )
    result = await db_session.execute(stmt)
    return list(result.scalars().all())


async def list_valid_niches(
    db_session: AsyncSession,
    niche_type: str | None = None,
) -> list[str]:
    """Names of active, non-deleted niches, optionally of one type."""
    stmt = select(Niche.name).where(
        Niche.is_active.is_(True),
        Niche.is_deleted.is_(False),
    )
    if niche_type is not None:
        stmt = stmt.where(Niche.niche_type == niche_type)
    stmt = stmt.order_by(Niche.id.asc())
    result = await db_session.execute(stmt)
    return list(result.scalars().all())


async def get_freelancer_profile(
    db_session: AsyncSession,
    user_id: uuid.UUID,
) -> FreelancerProfile | None:
    stmt = select(FreelancerProfile).where(FreelancerProfile.user_id == user_id)
    result = await db_session.execute(stmt)
    return result.scalar_one_or_none()


async def list_open_projects(db_session: AsyncSession) -> list[Project]:
    """Active, non-deleted projects open for applications, newest first."""
    stmt = (
        select(Project)
        .where(
            Project.is_active.is_(True),
            Project.is_deleted.is_(False),
            Project.status == PROJECT_STATUS_OPEN,
        )
        .order_by(Project.created_at.desc())
    )
    result = await db_session.execute(stmt)
    return list(result.scalars().all())
