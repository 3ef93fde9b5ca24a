"""Exception hierarchy raised by the service layer."""

from __future__ import annotations


class ProductivityError(Exception):
    """Base class for all errors raised by productivity_os."""


class ValidationError(ProductivityError, ValueError):
    """A field value was rejected."""


class InvalidDate(ValidationError):
    """A date could not be parsed or lies outside the representable range."""

    def __init__(self, value: object, reason: str | None = None) -> None:
        self.value = value
        message = f"Invalid date: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class SessionAlreadyCompleted(ValidationError):
    """A focus session was completed twice."""


class NotFoundError(ProductivityError, LookupError):
    """The requested row does not exist for this owner."""

    entity = "Record"

    def __init__(self, entity_id: object) -> None:
        self.entity_id = entity_id
        super().__init__(f"{self.entity} not found: {entity_id}")


class HabitNotFound(NotFoundError):
    entity = "Habit"


class TaskNotFound(NotFoundError):
    entity = "Task"


class FocusSessionNotFound(NotFoundError):
    entity = "Focus session"


class NoteNotFound(NotFoundError):
    entity = "Note"


__all__ = [
    "FocusSessionNotFound",
    "HabitNotFound",
    "InvalidDate",
    "NoteNotFound",
    "NotFoundError",
    "ProductivityError",
    "SessionAlreadyCompleted",
    "TaskNotFound",
    "ValidationError",
]
