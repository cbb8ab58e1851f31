import uuid
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Boolean, DateTime, ForeignKey, Text, Uuid, func
from workout_tracker.db import Base

class WorkoutSession(Base):
    __tablename__ = "workout_sessions"
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    workout_day_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("workout_days.id", ondelete="SET NULL"), index=True, nullable=True
    )
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), index=True)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    workout_day = relationship("WorkoutDay")
    sets = relationship("ExerciseSet", back_populates="session", cascade="all, delete-orphan")

    @property
    def sorted_sets(self):
        def key(s):
            order = s.exercise.sort_order if s.exercise is not None else 0
            return (order, s.set_number)
        return sorted(self.sets, key=key)
