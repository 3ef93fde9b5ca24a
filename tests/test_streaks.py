"""Comprehensive tests for habit streak calculations.

These tests verify the logic for calculating current and best streaks,
including edge cases like:
- Consecutive days
- Gaps in habit completion
- Streaks ending today, yesterday or further in the past
- Not-completed records and duplicate days
- Input order
"""

from __future__ import annotations

import itertools
import random
from datetime import date, timedelta

import pytest

from productivity_os.services.completion_log import CompletionRecord
from productivity_os.services.streaks import EMPTY_STATS, StreakStats, compute_streak_stats

TODAY = date(2025, 3, 15)


def ago(n: int) -> date:
    return TODAY - timedelta(days=n)


def done(*offsets: int) -> list[CompletionRecord]:
    return [CompletionRecord(ago(n), True) for n in offsets]


def stats(records) -> StreakStats:
    return compute_streak_stats(records, today=TODAY)


class TestScenarios:
    def test_three_days_ending_today(self):
        assert stats(done(0, 1, 2)) == StreakStats(3, 3, 3)

    def test_today_and_five_days_ago(self):
        assert stats(done(0, 5)) == StreakStats(1, 1, 2)

    def test_run_ending_two_days_ago_is_not_current(self):
        assert stats(done(3, 2)) == StreakStats(0, 2, 2)

    def test_no_completed_records(self):
        assert stats([]) == EMPTY_STATS
        assert stats([CompletionRecord(ago(0), False), CompletionRecord(ago(1), False)]) == StreakStats(0, 0, 0)


class TestCurrentStreak:
    def test_single_record_today(self):
        assert stats(done(0)) == StreakStats(1, 1, 1)

    def test_single_record_yesterday(self):
        assert stats(done(1)) == StreakStats(1, 1, 1)

    @pytest.mark.parametrize("offset", [2, 3, 10])
    def test_single_old_record_is_broken_by_inactivity(self, offset):
        assert stats(done(offset)) == StreakStats(0, 1, 1)

    def test_run_ending_yesterday_still_counts(self):
        assert stats(done(1, 2, 3, 4)) == StreakStats(4, 4, 4)

    def test_current_is_leading_run_not_longest(self):
        # Leading run: today, yesterday. Older run of five days.
        result = stats(done(0, 1, 5, 6, 7, 8, 9))
        assert result.current_streak == 2
        assert result.best_streak == 5
        assert result.total_completions == 7

    def test_later_runs_do_not_leak_into_current(self):
        # A single completion today, then a gap, then a long run.
        result = stats(done(0, 2, 3, 4, 5))
        assert result.current_streak == 1
        assert result.best_streak == 4

    def test_incomplete_day_breaks_current_run(self):
        records = done(0, 2) + [CompletionRecord(ago(1), False)]
        assert stats(records) == StreakStats(1, 1, 2)

    def test_future_completion_counts_as_current(self):
        assert stats(done(-1, 0)) == StreakStats(2, 2, 2)


class TestBestStreak:
    def test_multiple_runs_returns_longest(self):
        start = date(2024, 1, 1)
        days = [start + timedelta(days=i) for i in range(3)]
        days += [date(2024, 1, 10) + timedelta(days=i) for i in range(7)]
        days += [date(2024, 1, 20) + timedelta(days=i) for i in range(4)]
        result = stats([CompletionRecord(d, True) for d in days])

        assert result == StreakStats(0, 7, 14)

    def test_run_across_month_and_year_boundaries(self):
        days = [date(2024, 12, 30) + timedelta(days=i) for i in range(5)]
        result = stats([CompletionRecord(d, True) for d in days])

        assert result.best_streak == 5

    def test_run_across_leap_day(self):
        days = [date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]
        assert stats([CompletionRecord(d, True) for d in days]).best_streak == 3


class TestRobustness:
    def test_duplicate_days_count_once(self):
        records = done(0, 0, 1, 1, 2)
        assert stats(records) == StreakStats(3, 3, 3)

    def test_duplicate_day_with_mixed_flags_counts_if_any_completed(self):
        records = [CompletionRecord(ago(0), False), CompletionRecord(ago(0), True)]
        assert stats(records) == StreakStats(1, 1, 1)

    def test_accepts_any_iterable(self):
        assert stats(iter(done(0, 1))) == StreakStats(2, 2, 2)

    def test_is_deterministic(self):
        records = done(0, 1, 4, 5, 6)
        assert stats(records) == stats(records) == stats(list(records))


class TestProperties:
    def test_order_independence_all_permutations(self):
        records = done(0, 1, 3, 4, 5) + [CompletionRecord(ago(2), False)]
        expected = stats(records)

        for permutation in itertools.permutations(records):
            assert stats(permutation) == expected

    def test_best_is_never_below_current(self):
        rng = random.Random(20250315)
        for _ in range(200):
            offsets = rng.sample(range(0, 40), k=rng.randint(1, 25))
            records = [CompletionRecord(ago(n), rng.random() > 0.2) for n in offsets]
            result = stats(records)

            assert result.best_streak >= result.current_streak
            assert result.total_completions == sum(1 for r in records if r.completed)
            assert result.total_completions >= result.best_streak

    def test_as_dict(self):
        assert StreakStats(2, 5, 9).as_dict() == {
            "current_streak": 2,
            "best_streak": 5,
            "total_completions": 9,
        }
