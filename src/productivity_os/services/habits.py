"""Habit service: CRUD plus completion marking with streak recomputation.

Every change to a habit's completions goes through :meth:`HabitService.set_completion`,
which holds a per-habit lock while it loads the log, upserts the day,
recomputes the stats from the full log and writes record and stats in one
transaction. Habits never share a lock.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, Optional

from ..clock import Clock
from ..domain.repositories.habit import HabitRepository
from ..errors import HabitNotFound
from ..models.habit import DEFAULT_HABIT_COLOR, HABIT_FREQUENCIES, Habit
from . import validation
from .completion_log import CompletionLog, CompletionRecord, DayLike
from .streaks import StreakStats, compute_streak_stats

logger = logging.getLogger(__name__)


@dataclass
class _HabitLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    holders: int = 0


class HabitService:
    """Owner-scoped habit operations."""

    def __init__(self, repository: HabitRepository, clock: Clock):
        self.repository = repository
        self.clock = clock
        self._locks: dict[int, _HabitLock] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def _habit_lock(self, habit_id: int) -> Iterator[None]:
        """Serialize work on one habit; the entry lives only while someone holds or awaits it."""

        with self._locks_guard:
            entry = self._locks.get(habit_id)
            if entry is None:
                entry = self._locks[habit_id] = _HabitLock()
            entry.holders += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._locks_guard:
                entry.holders -= 1
                if entry.holders == 0:
                    del self._locks[habit_id]

    # CRUD
    def create_habit(
        self,
        *,
        user_id: int,
        name: str,
        description: str = "",
        color: str = DEFAULT_HABIT_COLOR,
        target_frequency: str = "daily",
    ) -> Habit:
        now = self.clock.now()
        habit = Habit(
            user_id=user_id,
            name=validation.required_text(name, field="Habit name", max_length=100),
            description=validation.optional_text(description, field="Description", max_length=500) or "",
            color=validation.color(color),
            target_frequency=validation.choice(
                target_frequency, field="Target frequency", allowed=HABIT_FREQUENCIES
            ),
            created_at=now,
            updated_at=now,
        )
        created = self.repository.create(habit, user_id=user_id)
        logger.info("Habit created", extra={"habit_id": created.id, "user_id": user_id})
        return created

    def get_habit(self, habit_id: int, *, user_id: int) -> Habit:
        habit = self.repository.get_by_id(habit_id, user_id=user_id)
        if habit is None:
            logger.warning("Habit not found", extra={"habit_id": habit_id, "user_id": user_id})
            raise HabitNotFound(habit_id)
        return habit

    def list_habits(self, *, user_id: int, active: Optional[bool] = None) -> list[Habit]:
        return self.repository.list_all(user_id=user_id, active=active)

    def update_habit(
        self,
        habit_id: int,
        *,
        user_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        color: Optional[str] = None,
        target_frequency: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Habit:
        """Change descriptive fields; ``None`` leaves a field untouched."""

        changes: dict[str, object] = {}
        if name is not None:
            changes["name"] = validation.required_text(name, field="Habit name", max_length=100)
        if description is not None:
            changes["description"] = validation.optional_text(
                description, field="Description", max_length=500
            )
        if color is not None:
            changes["color"] = validation.color(color)
        if target_frequency is not None:
            changes["target_frequency"] = validation.choice(
                target_frequency, field="Target frequency", allowed=HABIT_FREQUENCIES
            )
        if is_active is not None:
            changes["is_active"] = bool(is_active)
        changes["updated_at"] = self.clock.now()

        habit = self.repository.update_fields(habit_id, changes, user_id=user_id)
        if habit is None:
            raise HabitNotFound(habit_id)
        return habit

    def delete_habit(self, habit_id: int, *, user_id: int) -> None:
        """Remove the habit together with its completions and stats."""

        with self._habit_lock(habit_id):
            if not self.repository.delete(habit_id, user_id=user_id):
                raise HabitNotFound(habit_id)
        logger.info("Habit deleted", extra={"habit_id": habit_id, "user_id": user_id})

    # Completions
    def list_completions(self, habit_id: int, *, user_id: int) -> tuple[CompletionRecord, ...]:
        self.get_habit(habit_id, user_id=user_id)
        return self._load_log(habit_id, user_id=user_id).all()

    def mark_complete(self, habit_id: int, day: Optional[DayLike] = None, *, user_id: int) -> Habit:
        return self.set_completion(habit_id, day, True, user_id=user_id)

    def mark_incomplete(self, habit_id: int, day: Optional[DayLike] = None, *, user_id: int) -> Habit:
        return self.set_completion(habit_id, day, False, user_id=user_id)

    def set_completion(
        self, habit_id: int, day: Optional[DayLike], completed: bool, *, user_id: int
    ) -> Habit:
        """Upsert the mark for ``day`` (today when omitted) and refresh the stats."""

        with self._habit_lock(habit_id):
            self.get_habit(habit_id, user_id=user_id)
            today = self.clock.today()
            log = self._load_log(habit_id, user_id=user_id)
            record = log.upsert(today if day is None else day, completed)
            stats = compute_streak_stats(log.all(), today=today)
            habit = self.repository.upsert_completion(
                habit_id, record, stats, user_id=user_id, updated_at=self.clock.now()
            )
            if habit is None:
                raise HabitNotFound(habit_id)

        logger.info(
            "Habit completion recorded",
            extra={
                "habit_id": habit_id,
                "day": record.day.isoformat(),
                "completed": record.completed,
                **stats.as_dict(),
            },
        )
        return habit

    # Stats
    def get_stats(self, habit_id: int, *, user_id: int) -> StreakStats:
        """Stats as of the most recent recomputation."""

        habit = self.get_habit(habit_id, user_id=user_id)
        return StreakStats(
            current_streak=habit.current_streak,
            best_streak=habit.best_streak,
            total_completions=habit.total_completions,
        )

    def recalculate(self, habit_id: int, *, user_id: int) -> StreakStats:
        """Rebuild the stats cache from stored completions against today's date.

        The cached ``current_streak`` only changes on mutation, so a habit left
        alone for two days still shows its old streak until this runs.
        """

        with self._habit_lock(habit_id):
            self.get_habit(habit_id, user_id=user_id)
            stats = compute_streak_stats(
                self._load_log(habit_id, user_id=user_id).all(), today=self.clock.today()
            )
            if self.repository.save_stats(habit_id, stats, user_id=user_id) is None:
                raise HabitNotFound(habit_id)
        return stats

    def recalculate_all(self, *, user_id: int) -> dict[int, StreakStats]:
        results: dict[int, StreakStats] = {}
        for habit in self.repository.list_all(user_id=user_id):
            if habit.id is None:
                continue
            results[habit.id] = self.recalculate(habit.id, user_id=user_id)
        logger.info("Recalculated habit stats", extra={"user_id": user_id, "habits": len(results)})
        return results

    def _load_log(self, habit_id: int, *, user_id: int) -> CompletionLog:
        rows = self.repository.list_completions(habit_id, user_id=user_id)
        return CompletionLog.from_rows(rows, tz=self.clock.tz)


__all__ = ["HabitService"]
