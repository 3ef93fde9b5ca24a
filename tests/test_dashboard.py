"""Dashboard aggregate and analytics tests."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from productivity_os.errors import ValidationError
from productivity_os.services.dashboard import Bucket, DashboardStats


def test_empty_dashboard(dashboard_service, user):
    stats = dashboard_service.stats(user_id=user.id)

    assert stats == DashboardStats()
    assert stats.as_dict()["habits"] == {
        "total_habits": 0,
        "avg_current_streak": 0.0,
        "avg_best_streak": 0.0,
        "total_completions": 0,
    }


def test_dashboard_counts(
    dashboard_service, task_service, focus_service, note_service, habit_service, habit_factory, user, other_user
):
    task_service.create_task(user_id=user.id, title="late", due_date=date(2025, 3, 10))
    task_service.create_task(user_id=user.id, title="soon", due_date=date(2025, 3, 20))
    done = task_service.create_task(user_id=user.id, title="done", due_date=date(2025, 3, 1))
    task_service.set_completed(done.id, True, user_id=user.id)
    task_service.create_task(user_id=other_user.id, title="theirs", due_date=date(2025, 3, 1))

    habit_factory(name="a", completed_days=(date(2025, 3, 14), date(2025, 3, 15)))
    habit_factory(name="b", completed_days=(date(2025, 3, 1),))
    paused = habit_factory(name="paused", completed_days=(date(2025, 3, 15),))
    habit_service.update_habit(paused.id, user_id=user.id, is_active=False)

    for minutes in (25, 50):
        row = focus_service.start_session(user_id=user.id, duration=minutes)
        focus_service.complete_session(row.id, user_id=user.id)
    focus_service.start_session(user_id=user.id, duration=15)

    note_service.create_note(user_id=user.id, title="n1", content="x", is_pinned=True)
    note_service.create_note(user_id=user.id, title="n2", content="y")

    stats = dashboard_service.stats(user_id=user.id)

    assert (stats.tasks.total, stats.tasks.completed, stats.tasks.pending, stats.tasks.overdue) == (3, 1, 2, 1)
    assert stats.habits.total_habits == 2
    assert stats.habits.avg_current_streak == 1.0
    assert stats.habits.avg_best_streak == 1.5
    assert stats.habits.total_completions == 3
    assert (stats.focus.total_sessions, stats.focus.total_time) == (2, 75)
    assert stats.focus.avg_session_length == 37.5
    assert (stats.notes.total_notes, stats.notes.pinned_notes) == (2, 1)


def test_weekly_analytics_buckets_by_day(
    dashboard_service, task_service, focus_service, habit_factory, clock, user
):
    habit_factory(completed_days=(date(2025, 3, 1), date(2025, 3, 14), date(2025, 3, 15)))

    clock.set(datetime(2025, 3, 13, 10, 0))
    task = task_service.create_task(user_id=user.id, title="t", due_date=date(2025, 3, 15))
    task_service.set_completed(task.id, True, user_id=user.id)

    row = focus_service.start_session(user_id=user.id, duration=30)
    focus_service.complete_session(row.id, user_id=user.id)
    clock.set(datetime(2025, 3, 15, 9, 30))

    analytics = dashboard_service.analytics(user_id=user.id)

    assert analytics.period == "week"
    assert analytics.task_completions == [Bucket("2025-03-13", 1)]
    assert analytics.focus_sessions == [Bucket("2025-03-13", 1, 30)]
    assert analytics.habit_completions == [Bucket("2025-03-14", 1), Bucket("2025-03-15", 1)]


def test_yearly_analytics_buckets_by_month(dashboard_service, habit_factory, user):
    habit_factory(
        completed_days=(date(2024, 2, 1), date(2024, 11, 5), date(2024, 11, 6), date(2025, 3, 15))
    )

    analytics = dashboard_service.analytics(user_id=user.id, period="year")

    assert analytics.habit_completions == [Bucket("2024-11", 2), Bucket("2025-03", 1)]
    assert analytics.as_dict()["period"] == "year"


def test_unknown_period(dashboard_service, user):
    with pytest.raises(ValidationError):
        dashboard_service.analytics(user_id=user.id, period="decade")
