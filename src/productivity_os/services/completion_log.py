"""Per-habit set of day records with upsert-by-day semantics."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Iterable, Iterator

from ..clock import UTC
from ..errors import InvalidDate

DayLike = date | datetime | str


@dataclass(frozen=True, slots=True)
class CompletionRecord:
    """One calendar day's mark for a habit."""

    day: date
    completed: bool


def normalize_day(value: DayLike, tz: tzinfo = UTC) -> date:
    """Return the calendar day ``value`` falls on in ``tz``.

    Aware datetimes are converted into ``tz`` first; naive datetimes and
    plain dates are taken as already local to ``tz``. ISO-8601 strings are
    parsed as either a date or a datetime.
    """

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidDate(value, "empty string")
        if text.endswith(("Z", "z")):
            text = f"{text[:-1]}+00:00"
        try:
            value = datetime.fromisoformat(text)
        except ValueError:
            try:
                value = date.fromisoformat(text)
            except ValueError as exc:
                raise InvalidDate(value, str(exc)) from exc

    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            return value.date()
        try:
            return value.astimezone(tz).date()
        except (OverflowError, ValueError) as exc:
            raise InvalidDate(value, "outside the representable range") from exc

    if isinstance(value, date):
        return value

    raise InvalidDate(value, f"unsupported type {type(value).__name__}")


class CompletionLog:
    """Day -> completed map for a single habit.

    Holds at most one record per calendar day; upserting a day that is
    already present overwrites its flag.
    """

    def __init__(self, records: Iterable[CompletionRecord] = (), *, tz: tzinfo = UTC):
        self.tz = tz
        self._records: dict[date, CompletionRecord] = {}
        for record in records:
            self._records[record.day] = CompletionRecord(day=record.day, completed=bool(record.completed))

    @classmethod
    def from_rows(cls, rows: Iterable, *, tz: tzinfo = UTC) -> "CompletionLog":
        """Build a log from persisted rows exposing ``day`` and ``completed``."""

        return cls((CompletionRecord(day=row.day, completed=row.completed) for row in rows), tz=tz)

    def upsert(self, value: DayLike, completed: bool) -> CompletionRecord:
        day = normalize_day(value, self.tz)
        record = CompletionRecord(day=day, completed=bool(completed))
        self._records[day] = record
        return record

    def get(self, value: DayLike) -> CompletionRecord | None:
        return self._records.get(normalize_day(value, self.tz))

    def all(self) -> tuple[CompletionRecord, ...]:
        """Snapshot of every record, oldest day first."""

        return tuple(self._records[day] for day in sorted(self._records))

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CompletionRecord]:
        return iter(self.all())

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, (date, datetime, str)):
            return False
        try:
            return normalize_day(value, self.tz) in self._records
        except InvalidDate:
            return False


__all__ = ["CompletionLog", "CompletionRecord", "DayLike", "normalize_day"]
