"""Service module exports."""

from . import (
    completion_log,
    dashboard,
    focus,
    habits,
    notes,
    periods,
    streaks,
    tasks,
    users,
    validation,
)

__all__ = [
    "completion_log",
    "dashboard",
    "focus",
    "habits",
    "notes",
    "periods",
    "streaks",
    "tasks",
    "users",
    "validation",
]
