"""Focus timer sessions and their totals."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Iterable, Optional

from ..clock import Clock
from ..domain.repositories.focus import FocusSessionRepository
from ..domain.repositories.task import TaskRepository
from ..errors import FocusSessionNotFound, SessionAlreadyCompleted, TaskNotFound, ValidationError
from ..models.focus import MAX_DURATION_MINUTES, MIN_DURATION_MINUTES, SESSION_TYPES, FocusSession
from . import validation
from .periods import months_before

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FocusTotals:
    """Count and minutes of completed focus sessions in a window."""

    total_sessions: int = 0
    total_time: int = 0


def _duration(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("Duration must be a whole number of minutes")
    if not MIN_DURATION_MINUTES <= value <= MAX_DURATION_MINUTES:
        raise ValidationError(
            f"Duration must be between {MIN_DURATION_MINUTES} and {MAX_DURATION_MINUTES} minutes"
        )
    return value


def totals(sessions: Iterable[FocusSession]) -> FocusTotals:
    result = FocusTotals()
    for row in sessions:
        result.total_sessions += 1
        result.total_time += row.duration
    return result


class FocusService:
    """Owner-scoped focus session operations."""

    def __init__(
        self,
        repository: FocusSessionRepository,
        clock: Clock,
        task_repository: TaskRepository,
    ):
        self.repository = repository
        self.clock = clock
        self.task_repository = task_repository

    def _linked_task(self, task_id: Optional[int], *, user_id: int) -> Optional[int]:
        """Return ``task_id`` once it is known to be one of the owner's tasks."""

        if task_id is None:
            return None
        if isinstance(task_id, bool) or not isinstance(task_id, int):
            raise ValidationError("Task id must be an integer")
        if self.task_repository.get_by_id(task_id, user_id=user_id) is None:
            logger.warning(
                "Focus session linked to unknown task",
                extra={"task_id": task_id, "user_id": user_id},
            )
            raise TaskNotFound(task_id)
        return task_id

    def start_session(
        self,
        *,
        user_id: int,
        duration: int,
        session_type: str = "focus",
        task_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> FocusSession:
        row = FocusSession(
            user_id=user_id,
            duration=_duration(duration),
            session_type=validation.choice(session_type, field="Session type", allowed=SESSION_TYPES),
            task_id=self._linked_task(task_id, user_id=user_id),
            notes=validation.optional_text(notes, field="Notes", max_length=500),
            start_time=self.clock.now(),
        )
        created = self.repository.create(row, user_id=user_id)
        logger.info(
            "Focus session started",
            extra={"session_id": created.id, "session_type": created.session_type, "duration": created.duration},
        )
        return created

    def get_session(self, session_id: int, *, user_id: int) -> FocusSession:
        row = self.repository.get_by_id(session_id, user_id=user_id)
        if row is None:
            logger.warning("Focus session not found", extra={"session_id": session_id, "user_id": user_id})
            raise FocusSessionNotFound(session_id)
        return row

    def complete_session(
        self, session_id: int, *, user_id: int, notes: Optional[str] = None
    ) -> FocusSession:
        current = self.get_session(session_id, user_id=user_id)
        if current.completed:
            raise SessionAlreadyCompleted(f"Focus session {session_id} is already completed")

        changes: dict[str, object] = {"completed": True, "end_time": self.clock.now()}
        if notes:
            changes["notes"] = validation.optional_text(notes, field="Notes", max_length=500)
        row = self.repository.update_fields(session_id, changes, user_id=user_id)
        if row is None:
            raise FocusSessionNotFound(session_id)
        logger.info("Focus session completed", extra={"session_id": session_id, "duration": row.duration})
        return row

    def update_session(
        self,
        session_id: int,
        *,
        user_id: int,
        duration: Optional[int] = None,
        session_type: Optional[str] = None,
        task_id: Optional[int] = None,
        notes: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> FocusSession:
        current = self.get_session(session_id, user_id=user_id)
        changes: dict[str, object] = {}
        if duration is not None:
            changes["duration"] = _duration(duration)
        if session_type is not None:
            changes["session_type"] = validation.choice(
                session_type, field="Session type", allowed=SESSION_TYPES
            )
        if task_id is not None:
            changes["task_id"] = self._linked_task(task_id, user_id=user_id)
        if notes is not None:
            changes["notes"] = validation.optional_text(notes, field="Notes", max_length=500)
        if completed is not None:
            changes["completed"] = bool(completed)
            if completed and current.end_time is None:
                changes["end_time"] = self.clock.now()
        if not changes:
            return current

        row = self.repository.update_fields(session_id, changes, user_id=user_id)
        if row is None:
            raise FocusSessionNotFound(session_id)
        return row

    def delete_session(self, session_id: int, *, user_id: int) -> None:
        if not self.repository.delete(session_id, user_id=user_id):
            raise FocusSessionNotFound(session_id)
        logger.info("Focus session deleted", extra={"session_id": session_id, "user_id": user_id})

    def list_sessions(
        self,
        *,
        user_id: int,
        session_type: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> list[FocusSession]:
        if session_type is not None:
            session_type = validation.choice(session_type, field="Session type", allowed=SESSION_TYPES)
        return self.repository.list_all(user_id=user_id, session_type=session_type, completed=completed)

    def stats(self, *, user_id: int) -> dict[str, FocusTotals]:
        """Completed focus-type sessions for today, the last 7 days, the last month and all time."""

        today = self.clock.today()
        today_start = datetime.combine(today, time.min)
        windows: dict[str, Optional[datetime]] = {
            "today": today_start,
            "week": today_start - timedelta(days=7),
            "month": datetime.combine(months_before(today, 1), time.min),
            "total": None,
        }
        return {
            name: totals(
                self.repository.list_all(
                    user_id=user_id, session_type="focus", completed=True, started_since=since
                )
            )
            for name, since in windows.items()
        }


__all__ = ["FocusService", "FocusTotals", "totals"]
