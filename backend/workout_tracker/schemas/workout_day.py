import uuid
from pydantic import BaseModel

class ExerciseRead(BaseModel):
    id: uuid.UUID
    name: str
    alternative_name: str | None = None
    display_name: str
    target_sets: int
    target_reps_min: int
    target_reps_max: int
    target_reps_range: str
    sort_order: int
    default_weight: float
    sf_symbol: str
    image_name: str | None = None

    model_config = {"from_attributes": True}

class WorkoutDaySummary(BaseModel):
    id: uuid.UUID
    name: str
    subtitle: str
    day_label: str
    sort_order: int

    model_config = {"from_attributes": True}

class WorkoutDayRead(WorkoutDaySummary):
    exercises: list[ExerciseRead]
