"""
Point the app at a throwaway SQLite file before anything imports
workout_tracker.db, then rebuild and reseed the schema for every test.
"""
import asyncio
import os
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

_tmp = Path(tempfile.mkdtemp(prefix="workout-tracker-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_tmp / 'test.db'}"
os.environ["SEED_CATALOG"] = "true"

import pytest
from fastapi.testclient import TestClient

from workout_tracker.catalog import seed_if_needed
from workout_tracker.db import Base, SessionLocal, engine
from workout_tracker.main import app
from workout_tracker.models import Exercise, ExerciseSet, WorkoutDay, WorkoutSession
from workout_tracker.repositories.day_repo import WorkoutDayRepository


class ManualClock:
    """Stand-in for asyncio.sleep: sleepers only wake when the test advances time."""

    def __init__(self):
        self._waiters = []

    @property
    def sleepers(self):
        return [f for f in self._waiters if not f.done()]

    async def sleep(self, _seconds):
        fut = asyncio.get_running_loop().create_future()
        self._waiters.append(fut)
        await fut

    def release(self):
        waiters, self._waiters = self._waiters, []
        for fut in waiters:
            if not fut.done():
                fut.set_result(None)

    async def advance(self, ticks=1):
        for _ in range(ticks):
            await asyncio.sleep(0)  # let countdowns reach their sleep
            self.release()
            await asyncio.sleep(0)  # let them commit the tick


@pytest.fixture(autouse=True)
def fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        seed_if_needed(db)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def push(db) -> WorkoutDay:
    return WorkoutDayRepository(db).by_sort_order(0)


@pytest.fixture
def pull(db) -> WorkoutDay:
    return WorkoutDayRepository(db).by_sort_order(1)


@pytest.fixture
def custom_day(db):
    """A one-exercise day so the numbers in a test are easy to follow."""
    def _make(target_sets=3, target_reps_min=10, target_reps_max=12, sort_order=9):
        day = WorkoutDay(name="Custom", subtitle="", day_label="Day X", sort_order=sort_order)
        day.exercises = [Exercise(name="Machine Press", target_sets=target_sets,
                                  target_reps_min=target_reps_min, target_reps_max=target_reps_max,
                                  sort_order=0)]
        db.add(day)
        db.commit()
        return day
    return _make


@pytest.fixture
def log_session(db):
    """Write a past session. ``performances`` maps Exercise -> [(weight, reps[, completed])]."""
    def _log(day, performances, *, days_ago=1, completed=True):
        when = datetime.now(timezone.utc) - timedelta(days=days_ago)
        sess = WorkoutSession(workout_day=day, date=when, is_completed=completed)
        for exercise, sets in performances.items():
            for number, perf in enumerate(sets, start=1):
                weight, reps, done = (*perf, True) if len(perf) == 2 else perf
                sess.sets.append(ExerciseSet(
                    exercise=exercise, set_number=number, weight=weight, reps=reps,
                    is_completed=done, completed_at=when if done else None,
                ))
        db.add(sess)
        db.commit()
        return sess
    return _log
