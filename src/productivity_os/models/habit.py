"""Habits tracking data structures."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

HABIT_FREQUENCIES = ("daily", "weekly")
DEFAULT_HABIT_COLOR = "#3B82F6"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Habit(SQLModel, table=True):
    """A user-defined habit tracked per calendar day.

    ``current_streak``, ``best_streak`` and ``total_completions`` cache the
    result of the streak calculator over ``completions`` and are only written
    by the habit service when a completion changes.
    """

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=100, index=True)
    description: str = Field(default="", max_length=500)
    color: str = Field(default=DEFAULT_HABIT_COLOR, max_length=16)
    target_frequency: str = Field(default="daily", max_length=16)
    is_active: bool = Field(default=True, nullable=False, index=True)
    created_at: datetime = Field(
        default_factory=_utcnow, nullable=False,
        sa_type=DateTime(timezone=False),
    )
    updated_at: datetime = Field(
        default_factory=_utcnow, nullable=False,
        sa_type=DateTime(timezone=False),
    )

    current_streak: int = Field(default=0, nullable=False)
    best_streak: int = Field(default=0, nullable=False)
    total_completions: int = Field(default=0, nullable=False)

    completions: list["HabitCompletion"] = Relationship(
        back_populates="habit",
        sa_relationship=relationship(
            "HabitCompletion",
            back_populates="habit",
            cascade="all, delete-orphan",
        ),
    )


class HabitCompletion(SQLModel, table=True):
    """One calendar day's completed/not-completed mark for a habit."""

    __tablename__: ClassVar[str] = "habit_completion"

    habit_id: int = Field(foreign_key="habit.id", primary_key=True)
    day: date = Field(primary_key=True, index=True)
    completed: bool = Field(default=False, nullable=False)

    habit: "Habit" = Relationship(
        back_populates="completions",
        sa_relationship=relationship("Habit", back_populates="completions"),
    )
