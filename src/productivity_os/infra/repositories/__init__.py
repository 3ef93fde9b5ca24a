"""Concrete repository implementations using SQLModel."""

from .focus import SQLModelFocusSessionRepository
from .habit import SQLModelHabitRepository
from .note import SQLModelNoteRepository
from .task import SQLModelTaskRepository

__all__ = [
    "SQLModelFocusSessionRepository",
    "SQLModelHabitRepository",
    "SQLModelNoteRepository",
    "SQLModelTaskRepository",
]
