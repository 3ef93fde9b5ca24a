"""Note repository protocol."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from ...models.note import Note


class NoteRepository(Protocol):
    """Repository for managing notes."""

    def get_by_id(self, note_id: int, *, user_id: int) -> Optional[Note]:
        """Retrieve a note by ID."""
        ...

    def search(self, *, user_id: int, text: Optional[str] = None) -> list[Note]:
        """List notes, pinned first then newest, optionally matching ``text``."""
        ...

    def create(self, note: Note, *, user_id: int) -> Note:
        """Create a new note."""
        ...

    def update_fields(
        self, note_id: int, changes: Mapping[str, Any], *, user_id: int
    ) -> Optional[Note]:
        """Apply field changes to a note."""
        ...

    def delete(self, note_id: int, *, user_id: int) -> bool:
        """Delete a note by ID."""
        ...
