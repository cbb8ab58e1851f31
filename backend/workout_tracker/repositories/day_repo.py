from __future__ import annotations
from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from workout_tracker.models import Exercise, WorkoutDay
from workout_tracker.repositories.base import BaseRepository

class WorkoutDayRepository(BaseRepository[WorkoutDay]):
    model = WorkoutDay

    def list(self) -> list[WorkoutDay]:
        stmt = select(WorkoutDay).options(selectinload(WorkoutDay.exercises))\
                                 .order_by(WorkoutDay.sort_order.asc())
        return self.scalars(stmt)

    def count(self) -> int:
        return self.scalar(select(func.count()).select_from(WorkoutDay))

    def by_sort_order(self, sort_order: int) -> WorkoutDay | None:
        return self.first(select(WorkoutDay).where(WorkoutDay.sort_order == sort_order))

    def get_exercise(self, exercise_id) -> Exercise | None:
        return self.first(select(Exercise).where(Exercise.id == exercise_id))
