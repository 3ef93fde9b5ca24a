"""Repository protocol definitions for domain layer."""

from .focus import FocusSessionRepository
from .habit import HabitRepository
from .note import NoteRepository
from .task import TaskRepository

__all__ = [
    "FocusSessionRepository",
    "HabitRepository",
    "NoteRepository",
    "TaskRepository",
]
