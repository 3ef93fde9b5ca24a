"""Streak statistics derived from a habit's completion records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from .completion_log import CompletionRecord


@dataclass(frozen=True, slots=True)
class StreakStats:
    """Derived streak figures for one habit."""

    current_streak: int = 0
    best_streak: int = 0
    total_completions: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "current_streak": self.current_streak,
            "best_streak": self.best_streak,
            "total_completions": self.total_completions,
        }


EMPTY_STATS = StreakStats()

# A streak stays current while the latest completion is today or yesterday.
CURRENT_STREAK_MAX_GAP_DAYS = 1


def compute_streak_stats(records: Iterable[CompletionRecord], *, today: date) -> StreakStats:
    """Return current/best streak and total completions for ``records``.

    ``records`` may be in any order. Records with ``completed`` false are
    ignored, and several records for the same day count as one day.
    """

    days = sorted({record.day for record in records if record.completed}, reverse=True)
    if not days:
        return EMPTY_STATS

    run = 1
    best = 1
    leading_run = 1
    in_leading_run = True
    for previous, day in zip(days, days[1:]):
        if (previous - day).days == 1:
            run += 1
        else:
            run = 1
            in_leading_run = False
        if in_leading_run:
            leading_run = run
        best = max(best, run)

    current = leading_run if (today - days[0]).days <= CURRENT_STREAK_MAX_GAP_DAYS else 0
    return StreakStats(current_streak=current, best_streak=best, total_completions=len(days))


__all__ = ["CURRENT_STREAK_MAX_GAP_DAYS", "EMPTY_STATS", "StreakStats", "compute_streak_stats"]
