# workout_tracker/services/history.py
"""Look up the last logged performance of an exercise.

Only the newest ``HISTORY_LOOKBACK`` completed sessions are examined. The
first one performed on the same workout day that holds completed sets for
the exercise wins; numbers are never merged across sessions.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable

from sqlalchemy.orm import Session

from workout_tracker.models import Exercise, ExerciseSet, WorkoutDay, WorkoutSession
from workout_tracker.repositories.session_repo import HISTORY_LOOKBACK, SessionRepository


@dataclass(frozen=True, slots=True)
class SetPerformance:
    weight: float
    reps: int


def recent_sessions(db: Session) -> list[WorkoutSession]:
    return SessionRepository(db).recent_completed(limit=HISTORY_LOOKBACK)


def last_completed_sets(
    db: Session,
    workout_day: WorkoutDay,
    exercise: Exercise,
    *,
    recent: Iterable[WorkoutSession] | None = None,
) -> list[ExerciseSet]:
    """Completed sets of ``exercise`` from its latest same-day session, by set number."""
    sessions = recent if recent is not None else recent_sessions(db)
    for past in sessions:
        if past.workout_day_id != workout_day.id:
            continue
        sets = sorted(
            (s for s in past.sets if s.exercise_id == exercise.id and s.is_completed),
            key=lambda s: s.set_number,
        )
        if sets:
            return sets
    return []


def last_session_data(
    db: Session,
    workout_day: WorkoutDay,
    exercise: Exercise,
    *,
    recent: Iterable[WorkoutSession] | None = None,
) -> dict[int, SetPerformance]:
    """Zero-based set index -> weight/reps from the last performance (empty if none)."""
    return {
        s.set_number - 1: SetPerformance(weight=s.weight, reps=s.reps)
        for s in last_completed_sets(db, workout_day, exercise, recent=recent)
    }
