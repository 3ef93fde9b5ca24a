"""Free-form notes."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlalchemy import JSON, Column, DateTime
from sqlmodel import Field, SQLModel

DEFAULT_NOTE_COLOR = "#FFFFFF"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Note(SQLModel, table=True):
    """A titled note with optional tags; pinned notes list first."""

    __tablename__: ClassVar[str] = "note"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    title: str = Field(nullable=False, max_length=200)
    content: str = Field(nullable=False, max_length=5000)
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    is_pinned: bool = Field(default=False, nullable=False, index=True)
    color: str = Field(default=DEFAULT_NOTE_COLOR, max_length=16)
    created_at: datetime = Field(
        default_factory=_utcnow, nullable=False, index=True,
        sa_type=DateTime(timezone=False),
    )
    updated_at: datetime = Field(
        default_factory=_utcnow, nullable=False,
        sa_type=DateTime(timezone=False),
    )
