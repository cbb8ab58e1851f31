from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import CheckConstraint, Float, Integer
from workout_tracker.db import Base

PREFERENCES_ID = 1

class UserPreferences(Base):
    """The single row of user-editable workout preferences."""
    __tablename__ = "user_preferences"
    __table_args__ = (
        CheckConstraint("rest_timer_duration > 0", name="ck_user_preferences_rest_timer"),
        CheckConstraint("weight_increment > 0", name="ck_user_preferences_weight_increment"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=PREFERENCES_ID)
    rest_timer_duration: Mapped[int] = mapped_column(Integer, nullable=False)
    weight_increment: Mapped[float] = mapped_column(Float, nullable=False)
