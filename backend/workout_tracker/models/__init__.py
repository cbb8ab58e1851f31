from workout_tracker.models.workout_day import WorkoutDay
from workout_tracker.models.exercise import Exercise
from workout_tracker.models.session import WorkoutSession
from workout_tracker.models.exercise_set import ExerciseSet
from workout_tracker.models.preferences import UserPreferences

__all__ = ["WorkoutDay", "Exercise", "WorkoutSession", "ExerciseSet", "UserPreferences"]
