import uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, String, Uuid
from workout_tracker.db import Base

class WorkoutDay(Base):
    __tablename__ = "workout_days"
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    subtitle: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    day_label: Mapped[str] = mapped_column(String(40), nullable=False, default="")
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    exercises = relationship(
        "Exercise",
        back_populates="workout_day",
        cascade="all, delete-orphan",
        order_by="Exercise.sort_order",
    )
    # Non-owning; deleting a day leaves its sessions with a NULL day
    sessions = relationship("WorkoutSession", viewonly=True)

    @property
    def sorted_exercises(self):
        return sorted(self.exercises, key=lambda e: e.sort_order)
