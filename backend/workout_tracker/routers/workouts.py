import uuid
from fastapi import APIRouter, Depends, HTTPException, status
from workout_tracker.deps.workouts import WorkoutRegistry, get_registry, get_workout
from workout_tracker.errors import SaveResult
from workout_tracker.models import ExerciseSet
from workout_tracker.schemas.active_workout import ActiveWorkoutRead, ExerciseProgress, RestTimerRead
from workout_tracker.schemas.exercise_set import SetRead, SetUpdate
from workout_tracker.schemas.workout_day import ExerciseRead
from workout_tracker.services.active_workout import ActiveWorkout

router = APIRouter(prefix="/workouts", tags=["workouts"])

def workout_read(engine: ActiveWorkout, result: SaveResult | None = None) -> ActiveWorkoutRead:
    saved = result.saved if result is not None else not engine.pending_save
    error = engine.last_error
    suggestions = engine.suggested_weights()
    if result is not None and result.error is not None:
        error = result.error
    return ActiveWorkoutRead(
        session_id=engine.session.id,
        workout_day_id=engine.workout_day.id,
        workout_day_name=engine.workout_day.name,
        state=engine.state.value,
        date=engine.session.date,
        completed_sets_count=engine.completed_sets_count,
        total_sets_count=engine.total_sets_count,
        progress=engine.progress,
        saved=saved,
        pending_save=engine.pending_save,
        error=str(error) if error else None,
        rest_timer=RestTimerRead.model_validate(engine.timer),
        exercises=[
            ExerciseProgress(
                exercise=ExerciseRead.model_validate(ex),
                is_skipped=engine.is_skipped(ex.id),
                suggested_weight=suggestions[ex.id],
                sets=[SetRead.model_validate(s) for s in engine.sets_for_exercise(ex.id)],
            )
            for ex in engine.exercises
        ],
    )

def _set_or_404(engine: ActiveWorkout, set_id: uuid.UUID) -> ExerciseSet:
    s = engine.get_set(set_id)
    if s is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Set not found in this workout")
    return s

def _exercise_or_404(engine: ActiveWorkout, exercise_id: uuid.UUID) -> uuid.UUID:
    if not any(ex.id == exercise_id for ex in engine.exercises):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not part of this workout")
    return exercise_id

@router.get("/{session_id}", response_model=ActiveWorkoutRead)
async def get_active(engine: ActiveWorkout = Depends(get_workout)):
    return workout_read(engine)

@router.post("/{session_id}/sets/{set_id}/complete", response_model=ActiveWorkoutRead)
async def complete_set(set_id: uuid.UUID, engine: ActiveWorkout = Depends(get_workout)):
    result = engine.complete_set(_set_or_404(engine, set_id))
    return workout_read(engine, result)

@router.post("/{session_id}/sets/{set_id}/uncomplete", response_model=ActiveWorkoutRead)
async def uncomplete_set(set_id: uuid.UUID, engine: ActiveWorkout = Depends(get_workout)):
    result = engine.uncomplete_set(_set_or_404(engine, set_id))
    return workout_read(engine, result)

@router.patch("/{session_id}/sets/{set_id}", response_model=ActiveWorkoutRead)
async def update_set(set_id: uuid.UUID, payload: SetUpdate, engine: ActiveWorkout = Depends(get_workout)):
    result = engine.update_set(_set_or_404(engine, set_id), weight=payload.weight, reps=payload.reps)
    return workout_read(engine, result)

@router.post("/{session_id}/exercises/{exercise_id}/skip", response_model=ActiveWorkoutRead)
async def skip_exercise(exercise_id: uuid.UUID, engine: ActiveWorkout = Depends(get_workout)):
    engine.skip_exercise(_exercise_or_404(engine, exercise_id))
    return workout_read(engine)

@router.delete("/{session_id}/exercises/{exercise_id}/skip", response_model=ActiveWorkoutRead)
async def unskip_exercise(exercise_id: uuid.UUID, engine: ActiveWorkout = Depends(get_workout)):
    engine.unskip_exercise(_exercise_or_404(engine, exercise_id))
    return workout_read(engine)

@router.post("/{session_id}/rest-timer/stop", response_model=ActiveWorkoutRead)
async def stop_rest_timer(engine: ActiveWorkout = Depends(get_workout)):
    engine.dismiss_rest_timer()
    return workout_read(engine)

@router.post("/{session_id}/save", response_model=ActiveWorkoutRead)
async def retry_save(engine: ActiveWorkout = Depends(get_workout),
                     registry: WorkoutRegistry = Depends(get_registry)):
    result = engine.retry_save()
    body = workout_read(engine, result)
    registry.release_if_done(engine)
    return body

@router.post("/{session_id}/finish", response_model=ActiveWorkoutRead)
async def finish_workout(engine: ActiveWorkout = Depends(get_workout),
                         registry: WorkoutRegistry = Depends(get_registry)):
    result = engine.finish()
    body = workout_read(engine, result)
    registry.release_if_done(engine)
    return body

@router.post("/{session_id}/cancel", response_model=ActiveWorkoutRead)
async def cancel_workout(engine: ActiveWorkout = Depends(get_workout),
                         registry: WorkoutRegistry = Depends(get_registry)):
    result = engine.cancel()
    body = workout_read(engine, result)
    registry.release_if_done(engine)
    return body
