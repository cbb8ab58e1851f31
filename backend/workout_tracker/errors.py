# workout_tracker/errors.py
from __future__ import annotations
from dataclasses import dataclass


class StoreError(Exception):
    """A write or query against the database failed."""


class WorkoutStateError(RuntimeError):
    """Caller misused the workout state machine (programming error, not I/O)."""


@dataclass(slots=True, frozen=True)
class SaveResult:
    """Outcome of flushing an engine mutation.

    ``saved`` is False when the change is applied in memory only; the
    engine keeps it queued so a later save can persist it.
    """
    saved: bool
    error: StoreError | None = None

    @classmethod
    def ok(cls) -> "SaveResult":
        return cls(saved=True)

    @classmethod
    def failed(cls, error: StoreError) -> "SaveResult":
        return cls(saved=False, error=error)
