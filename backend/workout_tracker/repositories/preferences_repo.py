from __future__ import annotations
from sqlalchemy import select

from workout_tracker.models import UserPreferences
from workout_tracker.models.preferences import PREFERENCES_ID
from workout_tracker.repositories.base import BaseRepository

class PreferencesRepository(BaseRepository[UserPreferences]):
    model = UserPreferences

    def current(self) -> UserPreferences | None:
        # populate_existing: another session may have changed the row
        stmt = select(UserPreferences).where(UserPreferences.id == PREFERENCES_ID)\
                                      .execution_options(populate_existing=True)
        return self.first(stmt)

    def save(self, *, rest_timer_duration: int, weight_increment: float) -> UserPreferences:
        row = self.current()
        if row is None:
            row = UserPreferences(id=PREFERENCES_ID)
            self.db.add(row)
        row.rest_timer_duration = rest_timer_duration
        row.weight_increment = weight_increment
        self.commit()
        return row
