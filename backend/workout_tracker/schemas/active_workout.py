import uuid
from datetime import datetime
from pydantic import BaseModel
from workout_tracker.schemas.exercise_set import SetRead
from workout_tracker.schemas.workout_day import ExerciseRead

class RestTimerRead(BaseModel):
    duration: int
    remaining: int
    is_running: bool

    model_config = {"from_attributes": True}

class ExerciseProgress(BaseModel):
    exercise: ExerciseRead
    is_skipped: bool
    suggested_weight: float | None = None
    sets: list[SetRead]

class ActiveWorkoutRead(BaseModel):
    session_id: uuid.UUID
    workout_day_id: uuid.UUID
    workout_day_name: str
    state: str
    date: datetime
    completed_sets_count: int
    total_sets_count: int
    progress: float
    # False when the last change only exists in memory; POST .../save retries
    saved: bool = True
    pending_save: bool = False
    error: str | None = None
    rest_timer: RestTimerRead
    exercises: list[ExerciseProgress]
