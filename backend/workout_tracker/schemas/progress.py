import datetime as dt
from pydantic import BaseModel
from workout_tracker.schemas.exercise_set import SetRead
from workout_tracker.schemas.session import SessionRead
from workout_tracker.schemas.workout_day import ExerciseRead

class ChartPointRead(BaseModel):
    date: dt.date
    weight: float

    model_config = {"from_attributes": True}

class ExerciseProgressRead(BaseModel):
    exercise: ExerciseRead
    personal_best: SetRead | None = None
    chart: list[ChartPointRead]
    sets: list[SetRead]

class MonthRead(BaseModel):
    key: str
    sessions: list[SessionRead]

    model_config = {"from_attributes": True}
