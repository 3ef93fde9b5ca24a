"""Task service: dated to-do items with filters and completion tracking."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional

from ..clock import Clock, to_reference
from ..domain.repositories.task import TaskRepository
from ..errors import InvalidDate, TaskNotFound, ValidationError
from ..models.task import TASK_PRIORITIES, Task
from . import validation

logger = logging.getLogger(__name__)

TASK_FILTERS = ("today", "overdue", "completed", "pending")
TASK_SORTS = ("priority", "due_date", "created")

_PRIORITY_RANK = {"high": 0, "medium": 1, "low": 2}


class TaskService:
    """Owner-scoped task operations."""

    def __init__(self, repository: TaskRepository, clock: Clock):
        self.repository = repository
        self.clock = clock

    def _due(self, value: date | datetime) -> datetime:
        if isinstance(value, datetime):
            return to_reference(value, self.clock.tz)
        if isinstance(value, date):
            return datetime.combine(value, time.min)
        raise InvalidDate(value, "due date must be a date or datetime")

    def create_task(
        self,
        *,
        user_id: int,
        title: str,
        due_date: date | datetime,
        description: str = "",
        priority: str = "medium",
        category: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
    ) -> Task:
        now = self.clock.now()
        task = Task(
            user_id=user_id,
            title=validation.required_text(title, field="Task title", max_length=200),
            description=validation.optional_text(description, field="Description", max_length=1000) or "",
            priority=validation.choice(priority, field="Priority", allowed=TASK_PRIORITIES),
            due_date=self._due(due_date),
            category=validation.optional_text(category, field="Category", max_length=50) or None,
            tags=validation.tags(tags),
            created_at=now,
            updated_at=now,
        )
        created = self.repository.create(task, user_id=user_id)
        logger.info("Task created", extra={"task_id": created.id, "user_id": user_id})
        return created

    def get_task(self, task_id: int, *, user_id: int) -> Task:
        task = self.repository.get_by_id(task_id, user_id=user_id)
        if task is None:
            logger.warning("Task not found", extra={"task_id": task_id, "user_id": user_id})
            raise TaskNotFound(task_id)
        return task

    def list_tasks(
        self,
        *,
        user_id: int,
        status: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> list[Task]:
        """List tasks filtered by ``status`` and ordered by ``sort``.

        ``status`` is one of ``today``, ``overdue``, ``completed``, ``pending``
        or ``None`` for all. ``sort`` is ``priority`` (high first, then due
        date), ``due_date`` or ``None``/``created`` for newest first.
        """

        if status is not None and status not in TASK_FILTERS:
            raise ValidationError(f"Unknown task filter: {status}")
        if sort is not None and sort not in TASK_SORTS:
            raise ValidationError(f"Unknown task sort: {sort}")

        tasks = self.repository.list_all(user_id=user_id)
        now = self.clock.now()

        if status == "today":
            start = datetime.combine(now.date(), time.min)
            end = start + timedelta(days=1)
            tasks = [t for t in tasks if start <= t.due_date < end]
        elif status == "overdue":
            tasks = [t for t in tasks if t.due_date < now and not t.completed]
        elif status == "completed":
            tasks = [t for t in tasks if t.completed]
        elif status == "pending":
            tasks = [t for t in tasks if not t.completed]

        if sort == "priority":
            tasks.sort(key=lambda t: (_PRIORITY_RANK.get(t.priority, 1), t.due_date))
        elif sort == "due_date":
            tasks.sort(key=lambda t: t.due_date)
        else:
            tasks.sort(key=lambda t: (t.created_at, t.id or 0), reverse=True)
        return tasks

    def update_task(
        self,
        task_id: int,
        *,
        user_id: int,
        title: Optional[str] = None,
        description: Optional[str] = None,
        priority: Optional[str] = None,
        due_date: Optional[date | datetime] = None,
        category: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
        completed: Optional[bool] = None,
    ) -> Task:
        """Change the given fields; ``None`` leaves a field untouched."""

        current = self.get_task(task_id, user_id=user_id)
        now = self.clock.now()
        changes: dict[str, object] = {"updated_at": now}
        if title is not None:
            changes["title"] = validation.required_text(title, field="Task title", max_length=200)
        if description is not None:
            changes["description"] = validation.optional_text(
                description, field="Description", max_length=1000
            )
        if priority is not None:
            changes["priority"] = validation.choice(priority, field="Priority", allowed=TASK_PRIORITIES)
        if due_date is not None:
            changes["due_date"] = self._due(due_date)
        if category is not None:
            changes["category"] = validation.optional_text(category, field="Category", max_length=50) or None
        if tags is not None:
            changes["tags"] = validation.tags(tags)
        if completed is not None and bool(completed) != current.completed:
            changes["completed"] = bool(completed)
            changes["completed_at"] = now if completed else None

        task = self.repository.update_fields(task_id, changes, user_id=user_id)
        if task is None:
            raise TaskNotFound(task_id)
        if "completed" in changes:
            logger.info(
                "Task completion changed",
                extra={"task_id": task_id, "completed": task.completed},
            )
        return task

    def set_completed(self, task_id: int, completed: bool, *, user_id: int) -> Task:
        return self.update_task(task_id, user_id=user_id, completed=completed)

    def delete_task(self, task_id: int, *, user_id: int) -> None:
        if not self.repository.delete(task_id, user_id=user_id):
            raise TaskNotFound(task_id)
        logger.info("Task deleted", extra={"task_id": task_id, "user_id": user_id})


__all__ = ["TASK_FILTERS", "TASK_SORTS", "TaskService"]
