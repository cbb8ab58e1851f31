import uuid
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from workout_tracker.db import get_db
from workout_tracker.repositories.day_repo import WorkoutDayRepository
from workout_tracker.repositories.session_repo import SessionRepository
from workout_tracker.schemas.exercise_set import SetRead
from workout_tracker.schemas.progress import ChartPointRead, ExerciseProgressRead, MonthRead
from workout_tracker.schemas.workout_day import ExerciseRead
from workout_tracker.services import progress

router = APIRouter(prefix="/progress", tags=["progress"])

@router.get("/history", response_model=list[MonthRead])
def history(db: Session = Depends(get_db)):
    groups = progress.sessions_by_month(SessionRepository(db).all_completed())
    return [MonthRead.model_validate(g) for g in groups]

@router.get("/exercises/{exercise_id}", response_model=ExerciseProgressRead)
def exercise_progress(exercise_id: uuid.UUID, db: Session = Depends(get_db)):
    exercise = WorkoutDayRepository(db).get_exercise(exercise_id)
    if not exercise:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
    sets = progress.completed_sets(db, exercise)
    best = progress.personal_best(exercise, sets)
    return ExerciseProgressRead(
        exercise=ExerciseRead.model_validate(exercise),
        personal_best=SetRead.model_validate(best) if best else None,
        chart=[ChartPointRead.model_validate(p) for p in progress.chart_data(sets)],
        sets=[SetRead.model_validate(s) for s in sets],
    )
