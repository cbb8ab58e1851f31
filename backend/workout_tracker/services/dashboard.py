# workout_tracker/services/dashboard.py
"""Summary numbers for the home screen: rotation, weekly count, streak."""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Sequence

from sqlalchemy.orm import Session

from workout_tracker.catalog import next_day_sort_order
from workout_tracker.models import WorkoutDay, WorkoutSession
from workout_tracker.repositories.day_repo import WorkoutDayRepository
from workout_tracker.repositories.session_repo import RECENT_LIMIT, SessionRepository


@dataclass(slots=True)
class DashboardSummary:
    next_day: WorkoutDay | None
    completed_this_week: int
    current_streak: int
    total_completed: int
    last_session: WorkoutSession | None
    incomplete_session: WorkoutSession | None


def local_day(moment: datetime) -> date:
    # SQLite hands back naive datetimes; they were written as UTC
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone().date()


def next_workout_day(days: Sequence[WorkoutDay], recent: Sequence[WorkoutSession]) -> WorkoutDay | None:
    last_order = None
    if recent and recent[0].workout_day is not None:
        last_order = recent[0].workout_day.sort_order
    wanted = next_day_sort_order(last_order)
    return next((d for d in days if d.sort_order == wanted), None)


def completed_this_week(recent: Iterable[WorkoutSession], today: date) -> int:
    week_start = today - timedelta(days=today.weekday())  # Monday
    return sum(1 for s in recent if local_day(s.date) >= week_start)


def current_streak(recent: Iterable[WorkoutSession], today: date) -> int:
    """Consecutive training days ending today, or yesterday if today is still open."""
    days = {local_day(s.date) for s in recent}
    if today in days:
        cursor = today
    elif today - timedelta(days=1) in days:
        cursor = today - timedelta(days=1)
    else:
        return 0
    streak = 0
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def build_dashboard(db: Session, *, today: date | None = None) -> DashboardSummary:
    today = today or date.today()
    sessions = SessionRepository(db)
    recent = sessions.recent_completed(limit=RECENT_LIMIT)
    days = WorkoutDayRepository(db).list()
    return DashboardSummary(
        next_day=next_workout_day(days, recent),
        completed_this_week=completed_this_week(recent, today),
        current_streak=current_streak(recent, today),
        total_completed=sessions.list_completed(limit=1).total,
        last_session=recent[0] if recent else None,
        incomplete_session=sessions.latest_incomplete(),
    )
