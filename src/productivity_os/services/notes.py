"""Note service: titled notes with tags, pinning and search."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..clock import Clock
from ..domain.repositories.note import NoteRepository
from ..errors import NoteNotFound
from ..models.note import DEFAULT_NOTE_COLOR, Note
from . import validation

logger = logging.getLogger(__name__)


class NoteService:
    """Owner-scoped note operations."""

    def __init__(self, repository: NoteRepository, clock: Clock):
        self.repository = repository
        self.clock = clock

    def create_note(
        self,
        *,
        user_id: int,
        title: str,
        content: str,
        tags: Optional[Iterable[str]] = None,
        is_pinned: bool = False,
        color: str = DEFAULT_NOTE_COLOR,
    ) -> Note:
        now = self.clock.now()
        note = Note(
            user_id=user_id,
            title=validation.required_text(title, field="Note title", max_length=200),
            content=validation.required_text(content, field="Note content", max_length=5000),
            tags=validation.tags(tags),
            is_pinned=bool(is_pinned),
            color=validation.color(color),
            created_at=now,
            updated_at=now,
        )
        created = self.repository.create(note, user_id=user_id)
        logger.info("Note created", extra={"note_id": created.id, "user_id": user_id})
        return created

    def get_note(self, note_id: int, *, user_id: int) -> Note:
        note = self.repository.get_by_id(note_id, user_id=user_id)
        if note is None:
            logger.warning("Note not found", extra={"note_id": note_id, "user_id": user_id})
            raise NoteNotFound(note_id)
        return note

    def update_note(
        self,
        note_id: int,
        *,
        user_id: int,
        title: Optional[str] = None,
        content: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
        is_pinned: Optional[bool] = None,
        color: Optional[str] = None,
    ) -> Note:
        changes: dict[str, object] = {"updated_at": self.clock.now()}
        if title is not None:
            changes["title"] = validation.required_text(title, field="Note title", max_length=200)
        if content is not None:
            changes["content"] = validation.required_text(content, field="Note content", max_length=5000)
        if tags is not None:
            changes["tags"] = validation.tags(tags)
        if is_pinned is not None:
            changes["is_pinned"] = bool(is_pinned)
        if color is not None:
            changes["color"] = validation.color(color)

        note = self.repository.update_fields(note_id, changes, user_id=user_id)
        if note is None:
            raise NoteNotFound(note_id)
        return note

    def delete_note(self, note_id: int, *, user_id: int) -> None:
        if not self.repository.delete(note_id, user_id=user_id):
            raise NoteNotFound(note_id)
        logger.info("Note deleted", extra={"note_id": note_id, "user_id": user_id})

    def list_notes(
        self,
        *,
        user_id: int,
        search: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> list[Note]:
        """Pinned notes first, then newest; ``search`` matches title or content."""

        notes = self.repository.search(user_id=user_id, text=(search or "").strip() or None)
        if tag:
            notes = [n for n in notes if tag in (n.tags or [])]
        return notes

    def all_tags(self, *, user_id: int) -> list[str]:
        found: set[str] = set()
        for note in self.repository.search(user_id=user_id):
            found.update(note.tags or [])
        return sorted(found)


__all__ = ["NoteService"]
