"""Pytest configuration and shared fixtures for Productivity OS tests.

Every test gets its own SQLite file under ``tmp_path``, a session factory,
a default owner and a clock frozen at 2025-03-15 09:30 in the reference
timezone, so streak assertions never depend on the wall clock.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from productivity_os.clock import FixedClock
from productivity_os.config import BaseConfig
from productivity_os.infra.database import create_db_engine, create_session_factory, init_database
from productivity_os.infra.repositories import (
    SQLModelFocusSessionRepository,
    SQLModelHabitRepository,
    SQLModelNoteRepository,
    SQLModelTaskRepository,
)
from productivity_os.models import Habit, User
from productivity_os.services import users
from productivity_os.services.dashboard import DashboardService
from productivity_os.services.focus import FocusService
from productivity_os.services.habits import HabitService
from productivity_os.services.notes import NoteService
from productivity_os.services.tasks import TaskService

TODAY = date(2025, 3, 15)
NOW = datetime(2025, 3, 15, 9, 30)


def days_ago(n: int) -> date:
    return TODAY - timedelta(days=n)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Point configuration at the test's temp dir and clear overrides."""

    monkeypatch.setenv("PRODUCTIVITY_OS_DATA_DIR", str(tmp_path))
    for name in ("DATABASE_URL", "TIMEZONE", "DEV_MODE"):
        monkeypatch.delenv(f"PRODUCTIVITY_OS_{name}", raising=False)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def config(isolated_env) -> BaseConfig:
    return BaseConfig()


@pytest.fixture
def db_engine(config):
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine with all tables created
    """
    engine = create_db_engine(config)
    init_database(engine)

    yield engine

    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    """Session factory matching what the repositories expect."""

    return create_session_factory(db_engine)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


# =============================================================================
# Owners
# =============================================================================


@pytest.fixture
def user(session_factory) -> User:
    return users.create_user(username="tester", session_factory=session_factory)


@pytest.fixture
def other_user(session_factory) -> User:
    return users.create_user(username="someone-else", session_factory=session_factory)


# =============================================================================
# Services
# =============================================================================


@pytest.fixture
def habit_repo(session_factory) -> SQLModelHabitRepository:
    return SQLModelHabitRepository(session_factory)


@pytest.fixture
def habit_service(habit_repo, clock) -> HabitService:
    return HabitService(habit_repo, clock)


@pytest.fixture
def task_service(session_factory, clock) -> TaskService:
    return TaskService(SQLModelTaskRepository(session_factory), clock)


@pytest.fixture
def focus_service(session_factory, clock) -> FocusService:
    return FocusService(
        SQLModelFocusSessionRepository(session_factory), clock, SQLModelTaskRepository(session_factory)
    )


@pytest.fixture
def note_service(session_factory, clock) -> NoteService:
    return NoteService(SQLModelNoteRepository(session_factory), clock)


@pytest.fixture
def dashboard_service(session_factory, clock) -> DashboardService:
    return DashboardService(session_factory, clock)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def habit_factory(habit_service, user):
    """Factory for creating test habits through the service.

    Returns:
        Callable: Function that creates and persists Habit instances
    """

    def _create_habit(
        name: str = "Test Habit",
        target_frequency: str = "daily",
        owner: User | None = None,
        completed_days: tuple[date, ...] = (),
    ) -> Habit:
        """Create a habit and mark ``completed_days`` complete."""
        owner = owner or user
        habit = habit_service.create_habit(
            user_id=owner.id, name=name, target_frequency=target_frequency
        )
        for day in completed_days:
            habit = habit_service.mark_complete(habit.id, day, user_id=owner.id)
        return habit

    return _create_habit
