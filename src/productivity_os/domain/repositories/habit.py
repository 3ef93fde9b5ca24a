"""Habit repository protocol."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Protocol

from ...models.habit import Habit, HabitCompletion
from ...services.completion_log import CompletionRecord
from ...services.streaks import StreakStats


class HabitRepository(Protocol):
    """Persistence collaborator consumed by the habit service."""

    def get_by_id(self, habit_id: int, *, user_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        ...

    def list_all(self, *, user_id: int, active: Optional[bool] = None) -> list[Habit]:
        """List habits newest first, optionally filtered by ``is_active``."""
        ...

    def create(self, habit: Habit, *, user_id: int) -> Habit:
        """Create a new habit."""
        ...

    def update_fields(
        self, habit_id: int, changes: Mapping[str, Any], *, user_id: int
    ) -> Optional[Habit]:
        """Apply descriptive field changes; never touches the stats cache."""
        ...

    def delete(self, habit_id: int, *, user_id: int) -> bool:
        """Delete a habit and its completions in one transaction."""
        ...

    def list_completions(self, habit_id: int, *, user_id: int) -> list[HabitCompletion]:
        """Load all completion records for a habit."""
        ...

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
        ...

    def save_stats(self, habit_id: int, stats: StreakStats, *, user_id: int) -> Optional[Habit]:
        """Persist a stats snapshot."""
        ...
