from pydantic import BaseModel
from workout_tracker.schemas.session import SessionRead
from workout_tracker.schemas.workout_day import WorkoutDaySummary

class DashboardRead(BaseModel):
    next_day: WorkoutDaySummary | None = None
    completed_this_week: int
    current_streak: int
    total_completed: int
    last_session: SessionRead | None = None
    incomplete_session: SessionRead | None = None

    model_config = {"from_attributes": True}
