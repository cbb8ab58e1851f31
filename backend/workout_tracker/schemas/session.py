import uuid
from datetime import datetime
from pydantic import BaseModel, Field
from workout_tracker.schemas.exercise_set import SetRead
from workout_tracker.schemas.workout_day import WorkoutDaySummary

class SessionRead(BaseModel):
    id: uuid.UUID
    workout_day_id: uuid.UUID | None = None
    workout_day: WorkoutDaySummary | None = None
    date: datetime
    is_completed: bool
    notes: str | None = None

    model_config = {"from_attributes": True}

class SessionDetail(SessionRead):
    # ordered by exercise position, then set number
    sets: list[SetRead] = Field(validation_alias="sorted_sets")

class SessionPage(BaseModel):
    items: list[SessionRead]
    total: int
    limit: int
    offset: int

    model_config = {"from_attributes": True}
