"""Dashboard aggregates across tasks, habits, focus sessions and notes."""

from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass, field
from datetime import datetime, time
from typing import Any

from sqlalchemy import func
from sqlmodel import Session, select

from ..clock import Clock
from ..infra.database import SessionFactory
from ..models.focus import FocusSession
from ..models.habit import Habit, HabitCompletion
from ..models.note import Note
from ..models.task import Task
from .periods import bucket_key, period_start


@dataclass(slots=True)
class TaskSummary:
    total: int = 0
    completed: int = 0
    pending: int = 0
    overdue: int = 0


@dataclass(slots=True)
class HabitSummary:
    total_habits: int = 0
    avg_current_streak: float = 0.0
    avg_best_streak: float = 0.0
    total_completions: int = 0


@dataclass(slots=True)
class FocusSummary:
    total_sessions: int = 0
    total_time: int = 0
    avg_session_length: float = 0.0


@dataclass(slots=True)
class NoteSummary:
    total_notes: int = 0
    pinned_notes: int = 0


@dataclass(slots=True)
class DashboardStats:
    tasks: TaskSummary = field(default_factory=TaskSummary)
    habits: HabitSummary = field(default_factory=HabitSummary)
    focus: FocusSummary = field(default_factory=FocusSummary)
    notes: NoteSummary = field(default_factory=NoteSummary)

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class Bucket:
    bucket: str
    count: int
    total_time: int = 0


@dataclass(slots=True)
class Analytics:
    period: str
    task_completions: list[Bucket] = field(default_factory=list)
    focus_sessions: list[Bucket] = field(default_factory=list)
    habit_completions: list[Bucket] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def _count(session: Session, model, *clauses) -> int:
    return int(session.exec(select(func.count()).select_from(model).where(*clauses)).one() or 0)


def _avg(value) -> float:
    return round(float(value), 2) if value is not None else 0.0


class DashboardService:
    """Read-only aggregates for one owner."""

    def __init__(self, session_factory: SessionFactory, clock: Clock):
        self.session_factory = session_factory
        self.clock = clock

    def stats(self, *, user_id: int) -> DashboardStats:
        now = self.clock.now()
        result = DashboardStats()
        with self.session_factory() as session:
            total = _count(session, Task, Task.user_id == user_id)
            completed = _count(session, Task, Task.user_id == user_id, Task.completed == True)  # noqa: E712
            result.tasks = TaskSummary(
                total=total,
                completed=completed,
                pending=total - completed,
                overdue=_count(
                    session,
                    Task,
                    Task.user_id == user_id,
                    Task.completed == False,  # noqa: E712
                    Task.due_date < now,
                ),
            )

            habit_count, avg_current, avg_best, completions = session.exec(
                select(
                    func.count(Habit.id),
                    func.avg(Habit.current_streak),
                    func.avg(Habit.best_streak),
                    func.sum(Habit.total_completions),
                ).where(Habit.user_id == user_id, Habit.is_active == True)  # noqa: E712
            ).one()
            result.habits = HabitSummary(
                total_habits=int(habit_count or 0),
                avg_current_streak=_avg(avg_current),
                avg_best_streak=_avg(avg_best),
                total_completions=int(completions or 0),
            )

            session_count, minutes, avg_minutes = session.exec(
                select(
                    func.count(FocusSession.id),
                    func.sum(FocusSession.duration),
                    func.avg(FocusSession.duration),
                ).where(
                    FocusSession.user_id == user_id,
                    FocusSession.completed == True,  # noqa: E712
                    FocusSession.session_type == "focus",
                )
            ).one()
            result.focus = FocusSummary(
                total_sessions=int(session_count or 0),
                total_time=int(minutes or 0),
                avg_session_length=_avg(avg_minutes),
            )

            result.notes = NoteSummary(
                total_notes=_count(session, Note, Note.user_id == user_id),
                pinned_notes=_count(session, Note, Note.user_id == user_id, Note.is_pinned == True),  # noqa: E712
            )
        return result

    def analytics(self, *, user_id: int, period: str = "week") -> Analytics:
        """Per-bucket activity since the start of ``period`` (week, month or year)."""

        start_day = period_start(period, self.clock.today())
        since = datetime.combine(start_day, time.min)
        result = Analytics(period=period)

        with self.session_factory() as session:
            done_at = session.exec(
                select(Task.completed_at).where(
                    Task.user_id == user_id,
                    Task.completed == True,  # noqa: E712
                    Task.completed_at >= since,  # type: ignore[operator]
                )
            ).all()
            task_counts = Counter(bucket_key(ts.date(), period) for ts in done_at if ts is not None)

            focus_rows = session.exec(
                select(FocusSession.start_time, FocusSession.duration).where(
                    FocusSession.user_id == user_id,
                    FocusSession.completed == True,  # noqa: E712
                    FocusSession.session_type == "focus",
                    FocusSession.start_time >= since,
                )
            ).all()
            focus_counts: Counter[str] = Counter()
            focus_minutes: Counter[str] = Counter()
            for started, duration in focus_rows:
                key = bucket_key(started.date(), period)
                focus_counts[key] += 1
                focus_minutes[key] += duration

            habit_days = session.exec(
                select(HabitCompletion.day)
                .join(Habit, Habit.id == HabitCompletion.habit_id)
                .where(
                    Habit.user_id == user_id,
                    Habit.is_active == True,  # noqa: E712
                    HabitCompletion.completed == True,  # noqa: E712
                    HabitCompletion.day >= start_day,
                )
            ).all()
            habit_counts = Counter(bucket_key(day, period) for day in habit_days)

        result.task_completions = [Bucket(k, task_counts[k]) for k in sorted(task_counts)]
        result.focus_sessions = [
            Bucket(k, focus_counts[k], focus_minutes[k]) for k in sorted(focus_counts)
        ]
        result.habit_completions = [Bucket(k, habit_counts[k]) for k in sorted(habit_counts)]
        return result


__all__ = [
    "Analytics",
    "Bucket",
    "DashboardService",
    "DashboardStats",
    "FocusSummary",
    "HabitSummary",
    "NoteSummary",
    "TaskSummary",
]
