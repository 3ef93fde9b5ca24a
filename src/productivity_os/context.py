"""Application context for dependency injection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine

from .clock import Clock, SystemClock
from .config import BaseConfig
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import (
    SQLModelFocusSessionRepository,
    SQLModelHabitRepository,
    SQLModelNoteRepository,
    SQLModelTaskRepository,
)
from .models.user import User
from .services import users
from .services.dashboard import DashboardService
from .services.focus import FocusService
from .services.habits import HabitService
from .services.notes import NoteService
from .services.tasks import TaskService

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Centralized application context with repositories and services."""

    config: BaseConfig
    engine: Engine
    session_factory: SessionFactory
    clock: Clock

    habit_repo: SQLModelHabitRepository
    task_repo: SQLModelTaskRepository
    focus_repo: SQLModelFocusSessionRepository
    note_repo: SQLModelNoteRepository

    habits: HabitService
    tasks: TaskService
    focus: FocusService
    notes: NoteService
    dashboard: DashboardService

    current_user: Optional[User] = None

    def require_user_id(self) -> int:
        """Return the current user id or raise if not set."""

        if self.current_user is None or self.current_user.id is None:
            raise RuntimeError("No current user")
        return self.current_user.id


def create_app_context(
    config: Optional[BaseConfig] = None,
    *,
    clock: Optional[Clock] = None,
    username: Optional[str] = None,
) -> AppContext:
    """Create the engine, schema, repositories and services.

    ``username`` selects the owner bound to ``current_user``; the ``local``
    user is used when omitted.
    """

    config = config or BaseConfig()
    clock = clock or SystemClock(config.reference_timezone())

    engine, session_factory = bootstrap_database(config)

    habit_repo = SQLModelHabitRepository(session_factory)
    task_repo = SQLModelTaskRepository(session_factory)
    focus_repo = SQLModelFocusSessionRepository(session_factory)
    note_repo = SQLModelNoteRepository(session_factory)

    if username:
        current_user = users.ensure_user(username, session_factory)
    else:
        current_user = users.ensure_local_user(session_factory)

    logger.info(
        "Application context ready",
        extra={"database_url": config.DATABASE_URL, "timezone": config.TIMEZONE},
    )

    return AppContext(
        config=config,
        engine=engine,
        session_factory=session_factory,
        clock=clock,
        habit_repo=habit_repo,
        task_repo=task_repo,
        focus_repo=focus_repo,
        note_repo=note_repo,
        habits=HabitService(habit_repo, clock),
        tasks=TaskService(task_repo, clock),
        focus=FocusService(focus_repo, clock, task_repo),
        notes=NoteService(note_repo, clock),
        dashboard=DashboardService(session_factory, clock),
        current_user=current_user,
    )
