from __future__ import annotations
from sqlalchemy import delete, select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from workout_tracker.errors import StoreError
from workout_tracker.models import ExerciseSet, WorkoutSession
from workout_tracker.repositories.base import BaseRepository, Page

# Lookback window for history seeding and progression checks
HISTORY_LOOKBACK = 5
# Window used by the dashboard (recency, streak, rotation)
RECENT_LIMIT = 20

class SessionRepository(BaseRepository[WorkoutSession]):
    model = WorkoutSession

    def recent_completed(self, *, limit: int = RECENT_LIMIT) -> list[WorkoutSession]:
        """Completed sessions, newest first."""
        stmt = select(WorkoutSession).where(WorkoutSession.is_completed.is_(True))\
                                     .options(selectinload(WorkoutSession.sets))\
                                     .order_by(WorkoutSession.date.desc())\
                                     .limit(limit)
        return self.scalars(stmt)

    def list_completed(self, *, limit: int = RECENT_LIMIT, offset: int = 0) -> Page[WorkoutSession]:
        stmt = select(WorkoutSession).where(WorkoutSession.is_completed.is_(True))\
                                     .order_by(WorkoutSession.date.desc())
        items = self.scalars(stmt.limit(limit).offset(offset))
        total = self.scalar(
            select(func.count()).select_from(WorkoutSession).where(WorkoutSession.is_completed.is_(True))
        )
        return Page(items=items, total=total, limit=limit, offset=offset)

    def all_completed(self) -> list[WorkoutSession]:
        stmt = select(WorkoutSession).where(WorkoutSession.is_completed.is_(True))\
                                     .order_by(WorkoutSession.date.desc())
        return self.scalars(stmt)

    def latest_incomplete(self, *, workout_day_id=None) -> WorkoutSession | None:
        stmt = select(WorkoutSession).where(WorkoutSession.is_completed.is_(False))
        if workout_day_id is not None:
            stmt = stmt.where(WorkoutSession.workout_day_id == workout_day_id)
        return self.first(stmt.order_by(WorkoutSession.date.desc()))

    def delete(self, session: WorkoutSession) -> None:
        """Remove a session; its sets go with it."""
        self.db.delete(session)
        self.commit()

    def delete_all(self) -> int:
        """Wipe every session and logged set; workout days and exercises stay."""
        try:
            self.db.execute(delete(ExerciseSet))
            deleted = self.db.execute(delete(WorkoutSession)).rowcount
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(str(e)) from e
        self.commit()
        return deleted
