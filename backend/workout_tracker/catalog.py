"""Static workout program and first-run seeding.

The program is a fixed three-day rotation (Push, Pull, Legs & Core). Every
exercise is prescribed as 3 sets of 10-12 reps; only the starting weight
and display metadata differ.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from workout_tracker.models import Exercise, WorkoutDay
from workout_tracker.repositories.day_repo import WorkoutDayRepository

log = logging.getLogger(__name__)

DEFAULT_TARGET_SETS = 3
DEFAULT_TARGET_REPS_MIN = 10
DEFAULT_TARGET_REPS_MAX = 12


@dataclass(frozen=True, slots=True)
class ExerciseTemplate:
    name: str
    sf_symbol: str
    default_weight: float
    image_name: str
    alternative_name: str | None = None
    target_sets: int = DEFAULT_TARGET_SETS
    target_reps_min: int = DEFAULT_TARGET_REPS_MIN
    target_reps_max: int = DEFAULT_TARGET_REPS_MAX


@dataclass(frozen=True, slots=True)
class DayTemplate:
    name: str
    subtitle: str
    day_label: str
    sort_order: int
    exercises: tuple[ExerciseTemplate, ...]


PROGRAM: tuple[DayTemplate, ...] = (
    DayTemplate(
        name="Push",
        subtitle="Chest, Shoulders, Triceps",
        day_label="Day A",
        sort_order=0,
        exercises=(
            ExerciseTemplate("Chest Press Machine", "figure.strengthtraining.traditional", 50, "equipment-chest-press"),
            ExerciseTemplate("Pec Deck / Machine Fly", "figure.arms.open", 40, "equipment-pec-deck"),
            ExerciseTemplate("Shoulder Press Machine", "figure.strengthtraining.traditional", 30, "equipment-shoulder-press"),
            ExerciseTemplate("Lateral Raise Machine", "figure.arms.open", 20, "equipment-lateral-raise",
                             alternative_name="or Cable Lateral Raises"),
            ExerciseTemplate("Tricep Pushdown", "figure.strengthtraining.functional", 25, "equipment-tricep-pushdown"),
            ExerciseTemplate("Assisted Dip Machine", "figure.strengthtraining.traditional", 30, "equipment-assisted-dip",
                             alternative_name="if available"),
        ),
    ),
    DayTemplate(
        name="Pull",
        subtitle="Back, Biceps, Rear Delts",
        day_label="Day B",
        sort_order=1,
        exercises=(
            ExerciseTemplate("Lat Pulldown", "figure.strengthtraining.traditional", 50, "equipment-lat-pulldown"),
            ExerciseTemplate("Seated Cable Row", "figure.rowing", 40, "equipment-seated-cable-row"),
            ExerciseTemplate("Rear Delt Fly Machine", "figure.arms.open", 30, "equipment-rear-delt-fly",
                             alternative_name="Reverse Pec Deck"),
            ExerciseTemplate("Cable Face Pulls", "figure.strengthtraining.functional", 15, "equipment-face-pulls"),
            ExerciseTemplate("Bicep Curl Machine", "figure.strengthtraining.functional", 25, "equipment-bicep-curl",
                             alternative_name="or Cable Curls"),
            ExerciseTemplate("Assisted Pull-Up Machine", "figure.strengthtraining.traditional", 30, "equipment-assisted-pullup",
                             alternative_name="if available"),
        ),
    ),
    DayTemplate(
        name="Legs & Core",
        subtitle="Quads, Hamstrings, Glutes, Core",
        day_label="Day C",
        sort_order=2,
        exercises=(
            ExerciseTemplate("Leg Press", "figure.strengthtraining.traditional", 90, "equipment-leg-press"),
            ExerciseTemplate("Leg Extension", "figure.walk", 40, "equipment-leg-extension"),
            ExerciseTemplate("Leg Curl", "figure.walk", 40, "equipment-leg-curl"),
            ExerciseTemplate("Hip Adductor Machine", "figure.flexibility", 40, "equipment-hip-adductor"),
            ExerciseTemplate("Hip Abductor Machine", "figure.flexibility", 40, "equipment-hip-abductor"),
            ExerciseTemplate("Calf Raise Machine", "figure.walk", 50, "equipment-calf-raise"),
            ExerciseTemplate("Cable Crunch", "figure.core.training", 30, "equipment-cable-crunch",
                             alternative_name="or Ab Machine"),
        ),
    ),
)

ROTATION_LENGTH = len(PROGRAM)


def next_day_sort_order(last_sort_order: int | None) -> int:
    """Position in the rotation that follows ``last_sort_order`` (0 with no history)."""
    if last_sort_order is None:
        return 0
    return (last_sort_order + 1) % ROTATION_LENGTH


def build_day(template: DayTemplate) -> WorkoutDay:
    day = WorkoutDay(
        name=template.name,
        subtitle=template.subtitle,
        day_label=template.day_label,
        sort_order=template.sort_order,
    )
    day.exercises = [
        Exercise(
            name=ex.name,
            alternative_name=ex.alternative_name,
            target_sets=ex.target_sets,
            target_reps_min=ex.target_reps_min,
            target_reps_max=ex.target_reps_max,
            sort_order=position,
            sf_symbol=ex.sf_symbol,
            default_weight=ex.default_weight,
            image_name=ex.image_name,
        )
        for position, ex in enumerate(template.exercises)
    ]
    return day


def seed_if_needed(db: Session) -> bool:
    """Insert the program when no workout day exists yet. Returns True if it seeded."""
    repo = WorkoutDayRepository(db)
    if repo.count() > 0:
        return False
    db.add_all([build_day(t) for t in PROGRAM])
    repo.commit()
    log.info("seeded %d workout days", len(PROGRAM))
    return True
