"""SQLModel implementation of the focus session repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional

from sqlmodel import select

from ...models.focus import FocusSession
from ..database import SessionFactory


class SQLModelFocusSessionRepository:
    """SQLModel-based focus session repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_id(self, session_id: int, *, user_id: int) -> Optional[FocusSession]:
        with self.session_factory() as session:
            obj = session.exec(
                select(FocusSession).where(
                    FocusSession.id == session_id, FocusSession.user_id == user_id
                )
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(
        self,
        *,
        user_id: int,
        session_type: Optional[str] = None,
        completed: Optional[bool] = None,
        started_since: Optional[datetime] = None,
    ) -> list[FocusSession]:
        """List sessions newest first with optional filters."""
        with self.session_factory() as session:
            statement = (
                select(FocusSession)
                .where(FocusSession.user_id == user_id)
                .order_by(FocusSession.start_time.desc(), FocusSession.id.desc())  # type: ignore[union-attr]
            )
            if session_type is not None:
                statement = statement.where(FocusSession.session_type == session_type)
            if completed is not None:
                statement = statement.where(FocusSession.completed == completed)
            if started_since is not None:
                statement = statement.where(FocusSession.start_time >= started_since)

            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, focus_session: FocusSession, *, user_id: int) -> FocusSession:
        with self.session_factory() as session:
            focus_session.user_id = user_id
            session.add(focus_session)
            session.commit()
            session.refresh(focus_session)
            session.expunge(focus_session)
            return focus_session

    def update_fields(
        self, session_id: int, changes: Mapping[str, Any], *, user_id: int
    ) -> Optional[FocusSession]:
        with self.session_factory() as session:
            row = session.exec(
                select(FocusSession).where(
                    FocusSession.id == session_id, FocusSession.user_id == user_id
                )
            ).first()
            if row is None:
                return None
            for key, value in changes.items():
                setattr(row, key, value)
            session.add(row)
            session.commit()
            session.refresh(row)
            session.expunge(row)
            return row

    def delete(self, session_id: int, *, user_id: int) -> bool:
        with self.session_factory() as session:
            row = session.exec(
                select(FocusSession).where(
                    FocusSession.id == session_id, FocusSession.user_id == user_id
                )
            ).first()
            if row is None:
                return False
            session.delete(row)
            session.commit()
            return True


__all__ = ["SQLModelFocusSessionRepository"]
