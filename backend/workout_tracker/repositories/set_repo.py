from __future__ import annotations
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from workout_tracker.models import ExerciseSet, WorkoutSession
from workout_tracker.repositories.base import BaseRepository

class SetRepository(BaseRepository[ExerciseSet]):
    model = ExerciseSet

    def list_by_session(self, session_id) -> list[ExerciseSet]:
        stmt = select(ExerciseSet).where(ExerciseSet.session_id == session_id)\
                                  .order_by(ExerciseSet.exercise_id, ExerciseSet.set_number.asc())
        return self.scalars(stmt)

    def completed_for_exercise(self, exercise_id) -> list[ExerciseSet]:
        """Completed sets of an exercise inside completed sessions, oldest session first."""
        stmt = select(ExerciseSet).join(ExerciseSet.session)\
                                  .where(ExerciseSet.exercise_id == exercise_id,
                                         ExerciseSet.is_completed.is_(True),
                                         WorkoutSession.is_completed.is_(True))\
                                  .options(selectinload(ExerciseSet.session))\
                                  .order_by(WorkoutSession.date.asc(), ExerciseSet.set_number.asc())
        return self.scalars(stmt)
