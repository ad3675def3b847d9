"""
EditMatch — User model.

One table holds both requesters (``account_type="user"``) and creators
(``account_type="creator"``).  ``artworks`` stores style ids as a JSON list:
exactly one for a requester, one to three for a creator.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, func
from sqlalchemy.dialects.postgresql import JSONB, UUID as PgUUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from editmatch.database import Base

ACCOUNT_TYPE_USER = "user"
ACCOUNT_TYPE_CREATOR = "creator"

CREATOR_TYPE_EDITOR = "editor"
CREATOR_TYPE_VIDEOGRAPHER = "videographer"


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        PgUUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    email: Mapped[str] = mapped_column(
        String, unique=True, index=True, nullable=False
    )
    display_name: Mapped[str] = mapped_column(String, nullable=False)
    account_type: Mapped[str] = mapped_column(
        String, index=True, nullable=False, comment="user / creator"
    )
    creator_type: Mapped[str | None] = mapped_column(
        String, nullable=True, comment="editor / videographer (creators only)"
    )
    artworks: Mapped[list | None] = mapped_column(
        JSONB, nullable=True, comment="Array of artwork style ids"
    )
    niche: Mapped[str | None] = mapped_column(String, nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default="true", nullable=False
    )
    is_banned: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default="false", nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), onupdate=func.now(), nullable=True
    )

    # ── Relationships ──────────────────────────────────────────────
    projects: Mapped[list["Project"]] = relationship(
        "Project", back_populates="owner", cascade="all, delete-orphan"
    )
    freelancer_profile: Mapped["FreelancerProfile"] = relationship(
        "FreelancerProfile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<User {self.email!r} id={self.id} type={self.account_type!r}>"
