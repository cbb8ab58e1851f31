# workout_tracker/services/progress.py
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Sequence

from sqlalchemy.orm import Session

from workout_tracker.models import Exercise, ExerciseSet, WorkoutSession
from workout_tracker.repositories.set_repo import SetRepository
from workout_tracker.services.dashboard import local_day


@dataclass(frozen=True, slots=True)
class ChartPoint:
    date: date
    weight: float


@dataclass(slots=True)
class MonthGroup:
    key: str  # e.g. "March 2025"
    sessions: list[WorkoutSession] = field(default_factory=list)


def completed_sets(db: Session, exercise: Exercise) -> list[ExerciseSet]:
    """Completed sets from completed sessions, oldest session first."""
    return SetRepository(db).completed_for_exercise(exercise.id)


def personal_best(exercise: Exercise, sets: Iterable[ExerciseSet]) -> ExerciseSet | None:
    """Heaviest set that reached the top of the rep range."""
    qualifying = [s for s in sets if s.reps >= exercise.target_reps_max]
    if not qualifying:
        return None
    return max(qualifying, key=lambda s: s.weight)


def chart_data(sets: Iterable[ExerciseSet]) -> list[ChartPoint]:
    """Top weight per training day; days that only logged zero are left out."""
    best: dict[date, float] = {}
    for s in sets:
        day = local_day(s.session.date)
        best[day] = max(best.get(day, 0.0), s.weight)
    return [ChartPoint(date=d, weight=w) for d, w in sorted(best.items()) if w > 0]


def sessions_by_month(sessions: Sequence[WorkoutSession]) -> list[MonthGroup]:
    groups: dict[str, MonthGroup] = {}
    for s in sorted(sessions, key=lambda s: s.date, reverse=True):
        key = local_day(s.date).strftime("%B %Y")
        groups.setdefault(key, MonthGroup(key=key)).sessions.append(s)
    # Built newest-first, so dict order is already newest month first
    return list(groups.values())
