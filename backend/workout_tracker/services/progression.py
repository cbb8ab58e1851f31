# workout_tracker/services/progression.py
from __future__ import annotations
from typing import Iterable, Sequence

from sqlalchemy.orm import Session

from workout_tracker.models import Exercise, ExerciseSet, WorkoutDay, WorkoutSession
from workout_tracker.services.history import last_completed_sets
from workout_tracker.services.preferences import load_preferences


def should_suggest_increase(exercise: Exercise, last_sets: Sequence[ExerciseSet]) -> bool:
    """Every prescribed set was completed at the top of the rep range."""
    if len(last_sets) != exercise.target_sets:
        return False
    return all(s.reps >= exercise.target_reps_max for s in last_sets)


def suggested_weight(
    db: Session,
    workout_day: WorkoutDay,
    exercise: Exercise,
    *,
    increment: float | None = None,
    recent: Iterable[WorkoutSession] | None = None,
) -> float | None:
    """Heaviest weight of the last qualifying session plus ``increment``, or None."""
    last_sets = last_completed_sets(db, workout_day, exercise, recent=recent)
    if not last_sets or not should_suggest_increase(exercise, last_sets):
        return None
    if increment is None:
        increment = load_preferences(db).weight_increment
    return max(s.weight for s in last_sets) + increment
