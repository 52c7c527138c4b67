from progresspoint.models.user import User
from progresspoint.models.exercise import Exercise
from progresspoint.models.workout import Workout, WorkoutExercise, WorkoutSet

__all__ = [
    "User",
    "Exercise",
    "Workout",
    "WorkoutExercise",
    "WorkoutSet",
]
