"""User bookkeeping. Authentication belongs to the hosting layer."""

from __future__ import annotations

import logging
from typing import Optional

from sqlmodel import select

from ..errors import ValidationError
from ..infra.database import SessionFactory
from ..models.user import User

logger = logging.getLogger(__name__)

LOCAL_USERNAME = "local"


def _clean_username(username: str) -> str:
    username = (username or "").strip()
    if not username:
        raise ValidationError("Username is required")
    if len(username) > 64:
        raise ValidationError("Username cannot exceed 64 characters")
    return username


def get_user_by_username(username: str, session_factory: SessionFactory) -> Optional[User]:
    """Fetch a user by username."""
    username = username.strip()
    with session_factory() as session:
        user = session.exec(select(User).where(User.username == username)).first()
        if user:
            session.expunge(user)
        return user


def create_user(*, username: str, session_factory: SessionFactory) -> User:
    """Create a new user; usernames are unique."""

    username = _clean_username(username)
    with session_factory() as session:
        existing = session.exec(select(User).where(User.username == username)).first()
        if existing:
            raise ValidationError("Username already exists")
        user = User(username=username)
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
        logger.info("Created user", extra={"user_id": user.id})
        return user


def ensure_user(username: str, session_factory: SessionFactory) -> User:
    """Return the named user, creating it on first use."""

    existing = get_user_by_username(_clean_username(username), session_factory)
    if existing is not None:
        return existing
    return create_user(username=username, session_factory=session_factory)


def ensure_local_user(session_factory: SessionFactory) -> User:
    """Single-owner installs run everything as the ``local`` user."""

    return ensure_user(LOCAL_USERNAME, session_factory)


__all__ = [
    "LOCAL_USERNAME",
    "create_user",
    "ensure_local_user",
    "ensure_user",
    "get_user_by_username",
]
