"""End-to-end wiring through create_app_context."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from productivity_os import create_app_context
from productivity_os.clock import FixedClock, SystemClock
from productivity_os.services.streaks import StreakStats


@pytest.fixture
def context(config):
    ctx = create_app_context(config, clock=FixedClock(datetime(2025, 3, 15, 9, 30)))
    yield ctx
    ctx.engine.dispose()


def test_context_binds_local_user(context, tmp_path):
    assert context.current_user.username == "local"
    assert context.require_user_id() == context.current_user.id
    assert (tmp_path / "productivity_os.db").exists()


def test_context_reuses_existing_user(config, context):
    again = create_app_context(config, clock=context.clock)
    try:
        assert again.current_user.id == context.current_user.id
    finally:
        again.engine.dispose()


def test_named_user(config):
    ctx = create_app_context(config, username="alice")
    try:
        assert ctx.current_user.username == "alice"
        assert isinstance(ctx.clock, SystemClock)
    finally:
        ctx.engine.dispose()


def test_require_user_id_without_user(context):
    context.current_user = None
    with pytest.raises(RuntimeError):
        context.require_user_id()


def test_services_share_one_database(context):
    user_id = context.require_user_id()
    habit = context.habits.create_habit(user_id=user_id, name="Read")
    for offset in range(3):
        context.habits.mark_complete(habit.id, date(2025, 3, 15) - timedelta(days=offset), user_id=user_id)
    context.tasks.create_task(user_id=user_id, title="File taxes", due_date=date(2025, 4, 15))

    assert context.habits.get_stats(habit.id, user_id=user_id) == StreakStats(3, 3, 3)
    dashboard = context.dashboard.stats(user_id=user_id)
    assert dashboard.habits.total_completions == 3
    assert dashboard.tasks.pending == 1
