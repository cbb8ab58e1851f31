import uuid
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import (
    Boolean, CheckConstraint, DateTime, Float, ForeignKey, Integer, UniqueConstraint, Uuid,
)
from workout_tracker.db import Base

class ExerciseSet(Base):
    __tablename__ = "exercise_sets"
    __table_args__ = (
        UniqueConstraint("session_id", "exercise_id", "set_number", name="uq_exercise_sets_position"),
        CheckConstraint("set_number >= 1", name="ck_exercise_sets_set_number"),
        CheckConstraint("weight >= 0", name="ck_exercise_sets_weight"),
        CheckConstraint("reps >= 0", name="ck_exercise_sets_reps"),
        CheckConstraint(
            "(is_completed AND completed_at IS NOT NULL) OR (NOT is_completed AND completed_at IS NULL)",
            name="ck_exercise_sets_completed_at",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    session_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("workout_sessions.id", ondelete="CASCADE"), index=True
    )
    exercise_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("exercises.id", ondelete="SET NULL"), index=True, nullable=True
    )
    set_number: Mapped[int] = mapped_column(Integer, nullable=False)
    weight: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    reps: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    session = relationship("WorkoutSession", back_populates="sets")
    exercise = relationship("Exercise")
