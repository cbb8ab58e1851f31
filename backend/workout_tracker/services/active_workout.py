# workout_tracker/services/active_workout.py
"""Live workout session engine.

An ``ActiveWorkout`` is bound to one workout day and walks the states
NOT_STARTED -> ACTIVE -> FINISHED | CANCELLED. Every mutation is applied to
the ORM objects first and then committed. When a commit fails the SQLAlchemy
session is rolled back and every change made since the last good commit is
applied again, so callers keep seeing what they asked for while
``pending_save`` stays true until ``retry_save()`` (or the next mutation)
gets it to disk.

Terminal transitions (finish / cancel) only happen once their commit
succeeds; until then the engine stays ACTIVE with the transition pending.
"""
from __future__ import annotations
import logging
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Callable

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from workout_tracker.errors import SaveResult, StoreError, WorkoutStateError
from workout_tracker.models import Exercise, ExerciseSet, WorkoutDay, WorkoutSession
from workout_tracker.services import progression
from workout_tracker.services.history import last_session_data, recent_sessions
from workout_tracker.services.preferences import load_preferences
from workout_tracker.services.rest_timer import RestTimer
from workout_tracker.settings import Settings, get_settings

log = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class WorkoutState(str, Enum):
    not_started = "not_started"
    active = "active"
    finished = "finished"
    cancelled = "cancelled"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ActiveWorkout:
    def __init__(
        self,
        db: Session,
        workout_day: WorkoutDay,
        *,
        settings: Settings | None = None,
        timer: RestTimer | None = None,
        clock: Clock = _utcnow,
    ):
        self.db = db
        self.workout_day = workout_day
        self.settings = settings or get_settings()
        self.rest_timer_duration = self.settings.REST_TIMER_DURATION
        self.weight_increment = self.settings.WEIGHT_INCREMENT
        self.timer = timer or RestTimer(self.rest_timer_duration)
        self.state = WorkoutState.not_started
        self.session: WorkoutSession | None = None
        self.skipped: set[uuid.UUID] = set()
        self.last_error: StoreError | None = None
        self._clock = clock
        self._sets: dict[uuid.UUID, list[ExerciseSet]] = {}
        self._by_id: dict[uuid.UUID, ExerciseSet] = {}
        self._unsaved: list[Callable[[], None]] = []
        self._pending_state: WorkoutState | None = None

    @classmethod
    def resume(cls, db: Session, session: WorkoutSession, **kwargs) -> "ActiveWorkout":
        """Pick an unfinished session back up as a live workout."""
        if session.is_completed:
            raise WorkoutStateError("session is already completed")
        if session.workout_day is None:
            raise WorkoutStateError("session has no workout day")
        engine = cls(db, session.workout_day, **kwargs)
        preferences = load_preferences(db, engine.settings)
        engine.rest_timer_duration = preferences.rest_timer_duration
        engine.weight_increment = preferences.weight_increment
        engine.session = session
        for s in sorted(session.sets, key=lambda s: s.set_number):
            engine._track(s)
        engine.state = WorkoutState.active
        log.info("resumed session %s (%s)", session.id, engine.workout_day.name)
        return engine

    # -- lifecycle -------------------------------------------------------

    @property
    def exercises(self) -> list[Exercise]:
        return self.workout_day.sorted_exercises

    @property
    def pending_save(self) -> bool:
        return bool(self._unsaved)

    def start(self) -> SaveResult:
        if self.state is not WorkoutState.not_started:
            raise WorkoutStateError(f"cannot start a workout that is {self.state.value}")
        # All reads happen before anything is mutated; a StoreError here
        # leaves the engine NOT_STARTED.
        preferences = load_preferences(self.db, self.settings)
        recent = recent_sessions(self.db)
        history = {
            ex.id: last_session_data(self.db, self.workout_day, ex, recent=recent)
            for ex in self.exercises
        }

        self.skipped.clear()
        # Fixed for the life of the workout; later preference edits apply to the next one
        self.rest_timer_duration = preferences.rest_timer_duration
        self.weight_increment = preferences.weight_increment
        session = WorkoutSession(
            id=uuid.uuid4(),
            workout_day=self.workout_day,
            workout_day_id=self.workout_day.id,
            date=self._clock(),
            is_completed=False,
        )
        for ex in self.exercises:
            previous = history[ex.id]
            for number in range(1, ex.target_sets + 1):
                prior = previous.get(number - 1)
                s = ExerciseSet(
                    id=uuid.uuid4(),
                    exercise=ex,
                    exercise_id=ex.id,
                    set_number=number,
                    weight=prior.weight if prior else 0,
                    reps=prior.reps if prior else ex.target_reps_max,
                    is_completed=False,
                    completed_at=None,
                )
                session.sets.append(s)
                self._track(s)

        self.session = session
        self.state = WorkoutState.active
        log.info("started %s session %s with %d sets", self.workout_day.name, session.id, len(session.sets))
        return self._apply(lambda: self.db.add(session))

    def finish(self) -> SaveResult:
        self._require_state(WorkoutState.active)
        if self._pending_state is WorkoutState.cancelled:
            raise WorkoutStateError("workout is being cancelled")
        if self._pending_state is WorkoutState.finished:
            return self.retry_save()

        self.timer.stop()
        session = self.session
        skipped = frozenset(self.skipped)

        def finalize() -> None:
            session.is_completed = True
            for s in [s for s in session.sets if s.exercise_id in skipped]:
                session.sets.remove(s)  # delete-orphan removes the row
                self._by_id.pop(s.id, None)
            for exercise_id in skipped:
                self._sets.pop(exercise_id, None)

        self._pending_state = WorkoutState.finished
        return self._apply(finalize)

    def cancel(self) -> SaveResult:
        if self.state is WorkoutState.cancelled:
            return SaveResult.ok()
        if self.state is WorkoutState.not_started:
            self.state = WorkoutState.cancelled
            return SaveResult.ok()
        self._require_state(WorkoutState.active)
        if self._pending_state is WorkoutState.cancelled:
            return self.retry_save()

        self.timer.stop()
        session = self.session

        def discard() -> None:
            state = inspect(session)
            if state.persistent:
                self.db.delete(session)
            elif state.pending:
                self.db.expunge(session)

        self._pending_state = WorkoutState.cancelled
        return self._apply(discard)

    def retry_save(self) -> SaveResult:
        if not self._unsaved:
            return SaveResult.ok()
        return self._flush()

    # -- sets ------------------------------------------------------------

    def sets_for_exercise(self, exercise_id: uuid.UUID) -> list[ExerciseSet]:
        return sorted(self._sets.get(exercise_id, []), key=lambda s: s.set_number)

    def get_set(self, set_id: uuid.UUID) -> ExerciseSet | None:
        return self._by_id.get(set_id)

    def complete_set(self, exercise_set: ExerciseSet) -> SaveResult:
        self._require_mutable()
        self._require_owned(exercise_set)
        completed_at = self._clock()

        def mark() -> None:
            exercise_set.is_completed = True
            exercise_set.completed_at = completed_at

        result = self._apply(mark)
        self.timer.start(self.rest_timer_duration)
        return result

    def uncomplete_set(self, exercise_set: ExerciseSet) -> SaveResult:
        self._require_mutable()
        self._require_owned(exercise_set)

        def unmark() -> None:
            exercise_set.is_completed = False
            exercise_set.completed_at = None

        return self._apply(unmark)

    def update_set(self, exercise_set: ExerciseSet, *, weight: float | None = None, reps: int | None = None) -> SaveResult:
        self._require_mutable()
        self._require_owned(exercise_set)
        if weight is not None and weight < 0:
            raise ValueError("weight cannot be negative")
        if reps is not None and reps < 0:
            raise ValueError("reps cannot be negative")

        def edit() -> None:
            if weight is not None:
                exercise_set.weight = weight
            if reps is not None:
                exercise_set.reps = reps

        return self._apply(edit)

    # -- skipping ----------------------------------------------------------

    def skip_exercise(self, exercise_id: uuid.UUID) -> None:
        self._require_mutable()
        self._require_exercise(exercise_id)
        self.skipped.add(exercise_id)

    def unskip_exercise(self, exercise_id: uuid.UUID) -> None:
        self._require_mutable()
        self._require_exercise(exercise_id)
        self.skipped.discard(exercise_id)

    def is_skipped(self, exercise_id: uuid.UUID) -> bool:
        return exercise_id in self.skipped

    # -- rest timer ------------------------------------------------------

    def dismiss_rest_timer(self) -> None:
        self.timer.stop()

    # -- progress --------------------------------------------------------

    @property
    def completed_sets_count(self) -> int:
        # Work already logged counts even when its exercise is skipped
        return sum(1 for sets in self._sets.values() for s in sets if s.is_completed)

    @property
    def total_sets_count(self) -> int:
        return sum(ex.target_sets for ex in self.exercises if ex.id not in self.skipped)

    @property
    def progress(self) -> float:
        total = self.total_sets_count
        if total == 0:
            return 0.0
        return self.completed_sets_count / total

    def suggested_weight(self, exercise: Exercise) -> float | None:
        return progression.suggested_weight(
            self.db, self.workout_day, exercise, increment=self.weight_increment
        )

    def suggested_weights(self) -> dict[uuid.UUID, float | None]:
        """Suggestion per exercise, reading the recent history once."""
        recent = recent_sessions(self.db)
        return {
            ex.id: progression.suggested_weight(
                self.db, self.workout_day, ex, increment=self.weight_increment, recent=recent
            )
            for ex in self.exercises
        }

    # -- internals -------------------------------------------------------

    def _track(self, s: ExerciseSet) -> None:
        self._sets.setdefault(s.exercise_id, []).append(s)
        self._by_id[s.id] = s

    def _apply(self, change: Callable[[], None]) -> SaveResult:
        change()
        self._unsaved.append(change)
        return self._flush()

    def _flush(self) -> SaveResult:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            # Rollback discards pending rows and expires loaded ones; put the
            # caller's changes back so memory matches what was requested.
            for change in self._unsaved:
                change()
            self.last_error = StoreError(str(e))
            log.warning("save failed for session %s (%d unsaved changes): %s",
                        self.session.id if self.session else None, len(self._unsaved), e)
            return SaveResult.failed(self.last_error)

        self._unsaved.clear()
        self.last_error = None
        if self._pending_state is not None:
            self.state = self._pending_state
            self._pending_state = None
            log.info("session %s %s", self.session.id, self.state.value)
        return SaveResult.ok()

    def _require_state(self, expected: WorkoutState) -> None:
        if self.state is not expected:
            raise WorkoutStateError(f"workout is {self.state.value}, expected {expected.value}")

    def _require_mutable(self) -> None:
        self._require_state(WorkoutState.active)
        if self._pending_state is not None:
            raise WorkoutStateError(f"workout is being {self._pending_state.value}")

    def _require_owned(self, exercise_set: ExerciseSet) -> None:
        if self._by_id.get(exercise_set.id) is not exercise_set:
            raise WorkoutStateError(f"set {exercise_set.id} does not belong to this workout")

    def _require_exercise(self, exercise_id: uuid.UUID) -> None:
        if not any(ex.id == exercise_id for ex in self.exercises):
            raise WorkoutStateError(f"exercise {exercise_id} is not part of {self.workout_day.name}")
