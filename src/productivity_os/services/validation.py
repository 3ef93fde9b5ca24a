"""Field validation shared by the CRUD services."""

from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence

from ..errors import ValidationError

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

MAX_TAG_LENGTH = 30


def required_text(value: Optional[str], *, field: str, max_length: int) -> str:
    """Strip ``value`` and require 1..max_length characters."""

    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{field} is required")
    if len(text) > max_length:
        raise ValidationError(f"{field} cannot exceed {max_length} characters")
    return text


def optional_text(value: Optional[str], *, field: str, max_length: int) -> Optional[str]:
    if value is None:
        return None
    text = value.strip()
    if len(text) > max_length:
        raise ValidationError(f"{field} cannot exceed {max_length} characters")
    return text


def choice(value: str, *, field: str, allowed: Sequence[str]) -> str:
    normalized = (value or "").strip().lower()
    if normalized not in allowed:
        raise ValidationError(f"{field} must be one of: {', '.join(allowed)}")
    return normalized


def color(value: str, *, field: str = "Color") -> str:
    value = (value or "").strip()
    if not _HEX_COLOR.match(value):
        raise ValidationError(f"{field} must be a hex color such as #3B82F6")
    return value


def tags(values: Optional[Iterable[str]]) -> list[str]:
    """Trim tags, drop blanks and duplicates, keep first-seen order."""

    cleaned: list[str] = []
    for raw in values or ():
        tag = str(raw).strip()
        if not tag:
            continue
        if len(tag) > MAX_TAG_LENGTH:
            raise ValidationError(f"Tag cannot exceed {MAX_TAG_LENGTH} characters")
        if tag not in cleaned:
            cleaned.append(tag)
    return cleaned
