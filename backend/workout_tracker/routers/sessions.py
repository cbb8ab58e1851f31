import logging
import uuid
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from workout_tracker.db import get_db
from workout_tracker.deps.workouts import WorkoutRegistry, get_registry
from workout_tracker.repositories.session_repo import RECENT_LIMIT, SessionRepository
from workout_tracker.routers.workouts import workout_read
from workout_tracker.schemas.active_workout import ActiveWorkoutRead
from workout_tracker.schemas.session import SessionDetail, SessionPage, SessionRead
from workout_tracker.services.active_workout import ActiveWorkout

log = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])

@router.get("", response_model=SessionPage)
def list_sessions(
    db: Session = Depends(get_db),
    limit: int = Query(RECENT_LIMIT, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    page = SessionRepository(db).list_completed(limit=limit, offset=offset)
    return SessionPage.model_validate(page)

@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def reset_history(registry: WorkoutRegistry = Depends(get_registry)):
    # Live workouts point at rows about to disappear
    registry.close_all()
    db = registry.open_session()
    try:
        deleted = SessionRepository(db).delete_all()
    finally:
        db.close()
    log.info("workout history reset, %d sessions removed", deleted)

# Declared before /{session_id} so "incomplete" is not parsed as an id

@router.get("/incomplete", response_model=SessionRead)
def get_incomplete(db: Session = Depends(get_db)):
    sess = SessionRepository(db).latest_incomplete()
    if not sess:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No unfinished workout")
    return SessionRead.model_validate(sess)

@router.post("/incomplete/resume", response_model=ActiveWorkoutRead)
async def resume_incomplete(registry: WorkoutRegistry = Depends(get_registry)):
    db = registry.open_session()
    try:
        sess = SessionRepository(db).latest_incomplete()
        if not sess:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No unfinished workout")
        live = registry.get(sess.id)
        if live is not None:
            db.close()
            return workout_read(live)
        engine = ActiveWorkout.resume(db, sess)
    except Exception:
        db.close()
        raise
    registry.add(engine)
    return workout_read(engine)

@router.delete("/incomplete", status_code=status.HTTP_204_NO_CONTENT)
async def discard_incomplete(registry: WorkoutRegistry = Depends(get_registry)):
    db = registry.open_session()
    try:
        repo = SessionRepository(db)
        sess = repo.latest_incomplete()
        if not sess:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No unfinished workout")
        live = registry.get(sess.id)
        if live is not None:
            # Let the engine tear it down so its rest timer stops too
            result = live.cancel()
            registry.release_if_done(live)
            if not result.saved:
                raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(result.error))
        else:
            repo.delete(sess)
    finally:
        db.close()

@router.get("/{session_id}", response_model=SessionDetail)
def get_session(session_id: uuid.UUID, db: Session = Depends(get_db)):
    sess = SessionRepository(db).get(session_id)
    if not sess:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return SessionDetail.model_validate(sess)
