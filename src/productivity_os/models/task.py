"""SQLModel definitions for to-do tasks."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlalchemy import JSON, Column, DateTime
from sqlmodel import Field, SQLModel

TASK_PRIORITIES = ("low", "medium", "high")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Task(SQLModel, table=True):
    """A dated to-do item."""

    __tablename__: ClassVar[str] = "task"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    title: str = Field(nullable=False, max_length=200)
    description: str = Field(default="", max_length=1000)
    priority: str = Field(default="medium", max_length=16, index=True)
    completed: bool = Field(default=False, nullable=False, index=True)
    due_date: datetime = Field(nullable=False, index=True, sa_type=DateTime(timezone=False))
    completed_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=False))
    category: Optional[str] = Field(default=None, max_length=50)
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(
        default_factory=_utcnow, nullable=False,
        sa_type=DateTime(timezone=False),
    )
    updated_at: datetime = Field(
        default_factory=_utcnow, nullable=False,
        sa_type=DateTime(timezone=False),
    )
