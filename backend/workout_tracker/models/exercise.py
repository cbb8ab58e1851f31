import uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import CheckConstraint, Float, ForeignKey, Integer, String, Uuid
from workout_tracker.db import Base

class Exercise(Base):
    __tablename__ = "exercises"
    __table_args__ = (
        CheckConstraint("target_sets >= 1", name="ck_exercises_target_sets"),
        CheckConstraint(
            "target_reps_min > 0 AND target_reps_min <= target_reps_max",
            name="ck_exercises_rep_range",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    workout_day_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("workout_days.id", ondelete="CASCADE"), index=True
    )
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    alternative_name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    target_sets: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    target_reps_min: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    target_reps_max: Mapped[int] = mapped_column(Integer, nullable=False, default=12)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False)
    default_weight: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    sf_symbol: Mapped[str] = mapped_column(String(80), nullable=False, default="dumbbell.fill")
    image_name: Mapped[str | None] = mapped_column(String(120), nullable=True)

    workout_day = relationship("WorkoutDay", back_populates="exercises")
    # History across every session; sets are owned by their session, not by the exercise
    sets = relationship("ExerciseSet", viewonly=True)

    @property
    def target_reps_range(self) -> str:
        return f"{self.target_reps_min}-{self.target_reps_max}"

    @property
    def display_name(self) -> str:
        if self.alternative_name:
            return f"{self.name} ({self.alternative_name})"
        return self.name
