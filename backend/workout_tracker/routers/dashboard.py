from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from workout_tracker.db import get_db
from workout_tracker.schemas.dashboard import DashboardRead
from workout_tracker.services.dashboard import build_dashboard

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

@router.get("", response_model=DashboardRead)
def dashboard(db: Session = Depends(get_db)):
    return DashboardRead.model_validate(build_dashboard(db))
