"""Focus session repository protocol."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Protocol

from ...models.focus import FocusSession


class FocusSessionRepository(Protocol):
    """Repository for managing focus sessions."""

    def get_by_id(self, session_id: int, *, user_id: int) -> Optional[FocusSession]:
        """Retrieve a session by ID."""
        ...

    def list_all(
        self,
        *,
        user_id: int,
        session_type: Optional[str] = None,
        completed: Optional[bool] = None,
        started_since: Optional[datetime] = None,
    ) -> list[FocusSession]:
        """List sessions newest first with optional filters."""
        ...

    def create(self, focus_session: FocusSession, *, user_id: int) -> FocusSession:
        """Create a new session."""
        ...

    def update_fields(
        self, session_id: int, changes: Mapping[str, Any], *, user_id: int
    ) -> Optional[FocusSession]:
        """Apply field changes to a session."""
        ...

    def delete(self, session_id: int, *, user_id: int) -> bool:
        """Delete a session by ID."""
        ...
