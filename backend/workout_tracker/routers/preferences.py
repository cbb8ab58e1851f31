from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from workout_tracker.db import get_db
from workout_tracker.schemas.preferences import PreferencesRead, PreferencesUpdate
from workout_tracker.services.preferences import load_preferences, update_preferences

router = APIRouter(prefix="/settings", tags=["settings"])

@router.get("", response_model=PreferencesRead)
def read_settings(db: Session = Depends(get_db)):
    return PreferencesRead.model_validate(load_preferences(db))

# Workouts already in progress keep the rest duration they started with
@router.patch("", response_model=PreferencesRead)
def change_settings(payload: PreferencesUpdate, db: Session = Depends(get_db)):
    prefs = update_preferences(
        db,
        rest_timer_duration=payload.rest_timer_duration,
        weight_increment=payload.weight_increment,
    )
    return PreferencesRead.model_validate(prefs)
