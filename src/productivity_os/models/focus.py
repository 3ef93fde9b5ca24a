"""Timed focus and break sessions."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

SESSION_TYPES = ("focus", "break")
MIN_DURATION_MINUTES = 1
MAX_DURATION_MINUTES = 180


class FocusSession(SQLModel, table=True):
    """A pomodoro-style session; ``duration`` is the planned length in minutes."""

    __tablename__: ClassVar[str] = "focus_session"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    duration: int = Field(nullable=False)
    session_type: str = Field(default="focus", max_length=16, index=True)
    completed: bool = Field(default=False, nullable=False, index=True)
    start_time: datetime = Field(nullable=False, index=True, sa_type=DateTime(timezone=False))
    end_time: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=False))
    notes: Optional[str] = Field(default=None, max_length=500)
    task_id: Optional[int] = Field(default=None, foreign_key="task.id")
