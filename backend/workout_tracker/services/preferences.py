# workout_tracker/services/preferences.py
"""User-editable rest duration and weight increment.

Environment settings only supply the defaults; once the user saves a
preference it lives in the ``user_preferences`` row and wins.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from workout_tracker.repositories.preferences_repo import PreferencesRepository
from workout_tracker.settings import Settings, get_settings

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Preferences:
    rest_timer_duration: int
    weight_increment: float


def load_preferences(db: Session, settings: Settings | None = None) -> Preferences:
    settings = settings or get_settings()
    row = PreferencesRepository(db).current()
    if row is None:
        return Preferences(settings.REST_TIMER_DURATION, settings.WEIGHT_INCREMENT)
    return Preferences(row.rest_timer_duration, row.weight_increment)


def update_preferences(
    db: Session,
    *,
    rest_timer_duration: int | None = None,
    weight_increment: float | None = None,
    settings: Settings | None = None,
) -> Preferences:
    """Change one or both preferences. Live countdowns keep their duration."""
    if rest_timer_duration is not None and rest_timer_duration <= 0:
        raise ValueError("rest_timer_duration must be positive")
    if weight_increment is not None and weight_increment <= 0:
        raise ValueError("weight_increment must be positive")
    current = load_preferences(db, settings)
    row = PreferencesRepository(db).save(
        rest_timer_duration=rest_timer_duration if rest_timer_duration is not None else current.rest_timer_duration,
        weight_increment=weight_increment if weight_increment is not None else current.weight_increment,
    )
    log.info("preferences updated: rest %ss, increment %s", row.rest_timer_duration, row.weight_increment)
    return Preferences(row.rest_timer_duration, row.weight_increment)
