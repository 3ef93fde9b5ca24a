"""Clock abstraction supplying "now" and "today" in the reference timezone.

All timestamps handled by the services are naive datetimes expressed in the
reference timezone. Aware datetimes coming from callers are converted with
:func:`to_reference` before they are stored or compared.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Protocol

UTC = timezone.utc


class Clock(Protocol):
    """Source of the current instant."""

    @property
    def tz(self) -> tzinfo:  # pragma: no cover - interface
        ...

    def now(self) -> datetime:  # pragma: no cover - interface
        """Return the current naive datetime in the reference timezone."""
        ...

    def today(self) -> date:  # pragma: no cover - interface
        """Return the current calendar day in the reference timezone."""
        ...


def to_reference(moment: datetime, tz: tzinfo) -> datetime:
    """Express ``moment`` as a naive datetime in ``tz``.

    Naive inputs are assumed to already be reference-local.
    """

    if moment.tzinfo is None or moment.utcoffset() is None:
        return moment
    return moment.astimezone(tz).replace(tzinfo=None)


class SystemClock:
    """Wall clock in a fixed reference timezone."""

    def __init__(self, tz: tzinfo = UTC):
        self._tz = tz

    @property
    def tz(self) -> tzinfo:
        return self._tz

    def now(self) -> datetime:
        return datetime.now(self._tz).replace(tzinfo=None)

    def today(self) -> date:
        return self.now().date()


class FixedClock:
    """Clock frozen at a given instant; ``advance`` moves it forward."""

    def __init__(self, moment: datetime, tz: tzinfo = UTC):
        self._tz = tz
        self._now = to_reference(moment, tz)

    @property
    def tz(self) -> tzinfo:
        return self._tz

    def now(self) -> datetime:
        return self._now

    def today(self) -> date:
        return self._now.date()

    def set(self, moment: datetime) -> None:
        self._now = to_reference(moment, self._tz)

    def advance(self, **delta) -> None:
        self._now = self._now + timedelta(**delta)


__all__ = ["Clock", "FixedClock", "SystemClock", "UTC", "to_reference"]
