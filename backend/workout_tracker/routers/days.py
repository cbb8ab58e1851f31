import uuid
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from workout_tracker.db import get_db
from workout_tracker.deps.workouts import WorkoutRegistry, get_registry
from workout_tracker.repositories.day_repo import WorkoutDayRepository
from workout_tracker.repositories.session_repo import SessionRepository
from workout_tracker.routers.workouts import workout_read
from workout_tracker.schemas.active_workout import ActiveWorkoutRead
from workout_tracker.schemas.workout_day import WorkoutDayRead
from workout_tracker.services.active_workout import ActiveWorkout

router = APIRouter(prefix="/days", tags=["days"])

@router.get("", response_model=list[WorkoutDayRead])
def list_days(db: Session = Depends(get_db)):
    return [WorkoutDayRead.model_validate(d) for d in WorkoutDayRepository(db).list()]

@router.get("/{day_id}", response_model=WorkoutDayRead)
def get_day(day_id: uuid.UUID, db: Session = Depends(get_db)):
    day = WorkoutDayRepository(db).get(day_id)
    if not day:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout day not found")
    return WorkoutDayRead.model_validate(day)

# async: the engine and its rest timer live on the event loop
@router.post("/{day_id}/workouts", response_model=ActiveWorkoutRead, status_code=status.HTTP_201_CREATED)
async def start_workout(day_id: uuid.UUID, registry: WorkoutRegistry = Depends(get_registry)):
    db = registry.open_session()
    try:
        day = WorkoutDayRepository(db).get(day_id)
        if not day:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout day not found")
        # One unfinished session per day; the client resumes or discards it first
        if registry.for_day(day.id) or SessionRepository(db).latest_incomplete(workout_day_id=day.id):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="An unfinished workout exists for this day")
        engine = ActiveWorkout(db, day)
        result = engine.start()
    except Exception:
        db.close()
        raise
    registry.add(engine)
    return workout_read(engine, result)
