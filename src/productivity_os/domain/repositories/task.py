"""Task repository protocol."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from ...models.task import Task


class TaskRepository(Protocol):
    """Repository for managing task entities."""

    def get_by_id(self, task_id: int, *, user_id: int) -> Optional[Task]:
        """Retrieve a task by ID."""
        ...

    def list_all(self, *, user_id: int) -> list[Task]:
        """List every task of the owner."""
        ...

    def create(self, task: Task, *, user_id: int) -> Task:
        """Create a new task."""
        ...

    def update_fields(
        self, task_id: int, changes: Mapping[str, Any], *, user_id: int
    ) -> Optional[Task]:
        """Apply field changes to a task."""
        ...

    def delete(self, task_id: int, *, user_id: int) -> bool:
        """Delete a task by ID."""
        ...
