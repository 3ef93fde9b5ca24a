"""SQLModel implementation of Note repository."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from sqlalchemy import or_
from sqlmodel import select

from ...models.note import Note
from ..database import SessionFactory


class SQLModelNoteRepository:
    """SQLModel-based note repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_id(self, note_id: int, *, user_id: int) -> Optional[Note]:
        with self.session_factory() as session:
            obj = session.exec(
                select(Note).where(Note.id == note_id, Note.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def search(self, *, user_id: int, text: Optional[str] = None) -> list[Note]:
        """List notes, pinned first then newest, optionally matching ``text``."""
        with self.session_factory() as session:
            statement = (
                select(Note)
                .where(Note.user_id == user_id)
                .order_by(
                    Note.is_pinned.desc(),  # type: ignore[attr-defined]
                    Note.created_at.desc(),  # type: ignore[union-attr]
                    Note.id.desc(),  # type: ignore[union-attr]
                )
            )
            if text:
                statement = statement.where(
                    or_(
                        Note.title.icontains(text, autoescape=True),  # type: ignore[attr-defined]
                        Note.content.icontains(text, autoescape=True),  # type: ignore[attr-defined]
                    )
                )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, note: Note, *, user_id: int) -> Note:
        with self.session_factory() as session:
            note.user_id = user_id
            session.add(note)
            session.commit()
            session.refresh(note)
            session.expunge(note)
            return note

    def update_fields(
        self, note_id: int, changes: Mapping[str, Any], *, user_id: int
    ) -> Optional[Note]:
        with self.session_factory() as session:
            note = session.exec(
                select(Note).where(Note.id == note_id, Note.user_id == user_id)
            ).first()
            if note is None:
                return None
            for key, value in changes.items():
                setattr(note, key, value)
            session.add(note)
            session.commit()
            session.refresh(note)
            session.expunge(note)
            return note

    def delete(self, note_id: int, *, user_id: int) -> bool:
        with self.session_factory() as session:
            note = session.exec(
                select(Note).where(Note.id == note_id, Note.user_id == user_id)
            ).first()
            if note is None:
                return False
            session.delete(note)
            session.commit()
            return True


__all__ = ["SQLModelNoteRepository"]
