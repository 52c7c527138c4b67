"""
Workouts module - Database access for users, exercises and workouts.
"""
from progresspoint.services.workouts.store import (
    ExerciseStore,
    NewSet,
    NewWorkoutExercise,
    UserStore,
    WorkoutStore,
)

__all__ = [
    "ExerciseStore",
    "NewSet",
    "NewWorkoutExercise",
    "UserStore",
    "WorkoutStore",
]
