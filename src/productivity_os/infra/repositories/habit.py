"""SQLModel implementation of Habit repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional

from sqlmodel import Session, select

from ...models.habit import Habit, HabitCompletion
from ...services.completion_log import CompletionRecord
from ...services.streaks import StreakStats
from ..database import SessionFactory

# Columns callers may change through update_fields; the streak cache is not among them.
EDITABLE_FIELDS = frozenset(
    {"name", "description", "color", "target_frequency", "is_active", "updated_at"}
)


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    @staticmethod
    def _owned(session: Session, habit_id: int, user_id: int) -> Optional[Habit]:
        return session.exec(
            select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
        ).first()

    def get_by_id(self, habit_id: int, *, user_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        with self.session_factory() as session:
            obj = self._owned(session, habit_id, user_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: int, active: Optional[bool] = None) -> list[Habit]:
        """List habits newest first, optionally filtered by ``is_active``."""
        with self.session_factory() as session:
            statement = (
                select(Habit)
                .where(Habit.user_id == user_id)
                .order_by(Habit.created_at.desc(), Habit.id.desc())  # type: ignore[union-attr]
            )
            if active is not None:
                statement = statement.where(Habit.is_active == active)

            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, habit: Habit, *, user_id: int) -> Habit:
        """Create a new habit with an empty log and zeroed stats."""
        with self.session_factory() as session:
            habit.user_id = user_id
            habit.current_streak = 0
            habit.best_streak = 0
            habit.total_completions = 0
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def update_fields(
        self, habit_id: int, changes: Mapping[str, Any], *, user_id: int
    ) -> Optional[Habit]:
        """Apply descriptive field changes; never touches the stats cache."""
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields not editable: {sorted(unknown)}")
        with self.session_factory() as session:
            habit = self._owned(session, habit_id, user_id)
            if habit is None:
                return None
            for key, value in changes.items():
                setattr(habit, key, value)
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def delete(self, habit_id: int, *, user_id: int) -> bool:
        """Delete a habit and its completions in one transaction."""
        with self.session_factory() as session:
            habit = self._owned(session, habit_id, user_id)
            if habit is None:
                return False
            # The relationship cascade removes completion rows in the same flush.
            session.delete(habit)
            session.commit()
            return True

    # Completion operations
    def list_completions(self, habit_id: int, *, user_id: int) -> list[HabitCompletion]:
        """Load all completion records for a habit, oldest first."""
        with self.session_factory() as session:
            statement = (
                select(HabitCompletion)
                .join(Habit, Habit.id == HabitCompletion.habit_id)
                .where(Habit.user_id == user_id)
                .where(HabitCompletion.habit_id == habit_id)
                .order_by(HabitCompletion.day)  # type: ignore[arg-type]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def upsert_completion(
        self,
        habit_id: int,
        record: CompletionRecord,
        stats: StreakStats,
        *,
        user_id: int,
        updated_at: datetime,
    ) -> Optional[Habit]:
        """Write one completion record and the recomputed stats together."""
        with self.session_factory() as session:
            habit = self._owned(session, habit_id, user_id)
            if habit is None:
                return None

            existing = session.exec(
                select(HabitCompletion)
                .where(HabitCompletion.habit_id == habit_id)
                .where(HabitCompletion.day == record.day)
            ).first()
            if existing:
                existing.completed = record.completed
                session.add(existing)
            else:
                session.add(
                    HabitCompletion(habit_id=habit_id, day=record.day, completed=record.completed)
                )

            self._apply_stats(habit, stats)
            habit.updated_at = updated_at
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def save_stats(self, habit_id: int, stats: StreakStats, *, user_id: int) -> Optional[Habit]:
        """Persist a stats snapshot."""
        with self.session_factory() as session:
            habit = self._owned(session, habit_id, user_id)
            if habit is None:
                return None
            self._apply_stats(habit, stats)
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    @staticmethod
    def _apply_stats(habit: Habit, stats: StreakStats) -> None:
        habit.current_streak = stats.current_streak
        habit.best_streak = stats.best_streak
        habit.total_completions = stats.total_completions


__all__ = ["EDITABLE_FIELDS", "SQLModelHabitRepository"]
