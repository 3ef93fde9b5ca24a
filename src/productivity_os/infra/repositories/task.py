"""SQLModel implementation of Task repository."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from sqlmodel import select

from ...models.focus import FocusSession
from ...models.task import Task
from ..database import SessionFactory


class SQLModelTaskRepository:
    """SQLModel-based task repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_id(self, task_id: int, *, user_id: int) -> Optional[Task]:
        with self.session_factory() as session:
            obj = session.exec(
                select(Task).where(Task.id == task_id, Task.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: int) -> list[Task]:
        with self.session_factory() as session:
            rows = list(session.exec(select(Task).where(Task.user_id == user_id)).all())
            session.expunge_all()
            return rows

    def create(self, task: Task, *, user_id: int) -> Task:
        with self.session_factory() as session:
            task.user_id = user_id
            session.add(task)
            session.commit()
            session.refresh(task)
            session.expunge(task)
            return task

    def update_fields(
        self, task_id: int, changes: Mapping[str, Any], *, user_id: int
    ) -> Optional[Task]:
        with self.session_factory() as session:
            task = session.exec(
                select(Task).where(Task.id == task_id, Task.user_id == user_id)
            ).first()
            if task is None:
                return None
            for key, value in changes.items():
                setattr(task, key, value)
            session.add(task)
            session.commit()
            session.refresh(task)
            session.expunge(task)
            return task

    def delete(self, task_id: int, *, user_id: int) -> bool:
        with self.session_factory() as session:
            task = session.exec(
                select(Task).where(Task.id == task_id, Task.user_id == user_id)
            ).first()
            if task is None:
                return False
            # Sessions outlive the task they were linked to.
            linked = session.exec(
                select(FocusSession).where(
                    FocusSession.task_id == task_id, FocusSession.user_id == user_id
                )
            ).all()
            for row in linked:
                row.task_id = None
                session.add(row)
            session.flush()
            session.delete(task)
            session.commit()
            return True


__all__ = ["SQLModelTaskRepository"]
