# workout_tracker/deps/workouts.py
from __future__ import annotations
import logging
import uuid
from typing import Callable

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from workout_tracker.db import SessionLocal
from workout_tracker.services.active_workout import ActiveWorkout, WorkoutState

log = logging.getLogger(__name__)

TERMINAL = (WorkoutState.finished, WorkoutState.cancelled)

class WorkoutRegistry:
    """Live workouts keyed by session id.

    Each engine keeps its own database session for as long as it is live;
    the registry closes it once the workout reaches a terminal state.
    """
    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.session_factory = session_factory
        self._engines: dict[uuid.UUID, ActiveWorkout] = {}

    def __len__(self) -> int:
        return len(self._engines)

    def open_session(self) -> Session:
        return self.session_factory()

    def add(self, engine: ActiveWorkout) -> ActiveWorkout:
        self._engines[engine.session.id] = engine
        return engine

    def get(self, session_id: uuid.UUID) -> ActiveWorkout | None:
        return self._engines.get(session_id)

    def for_day(self, workout_day_id: uuid.UUID) -> ActiveWorkout | None:
        return next((e for e in self._engines.values() if e.workout_day.id == workout_day_id), None)

    def release(self, engine: ActiveWorkout) -> None:
        self._engines.pop(engine.session.id, None)
        engine.timer.stop()
        engine.db.close()

    def release_if_done(self, engine: ActiveWorkout) -> None:
        if engine.state in TERMINAL:
            self.release(engine)

    def close_all(self) -> None:
        for engine in list(self._engines.values()):
            if engine.pending_save:
                log.warning("closing workout %s with unsaved changes", engine.session.id)
            self.release(engine)

def get_registry(request: Request) -> WorkoutRegistry:
    return request.app.state.workouts

def get_workout(session_id: uuid.UUID, registry: WorkoutRegistry = Depends(get_registry)) -> ActiveWorkout:
    engine = registry.get(session_id)
    if engine is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No live workout for this session")
    return engine
