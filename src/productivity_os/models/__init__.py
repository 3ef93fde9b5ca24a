"""SQLModel table exports."""

from .focus import FocusSession
from .habit import Habit, HabitCompletion
from .note import Note
from .task import Task
from .user import User

__all__ = [
    "FocusSession",
    "Habit",
    "HabitCompletion",
    "Note",
    "Task",
    "User",
]
