"""
Stats module - Profile statistics and streak computation.

This module provides:
- Day-key normalization of workout timestamps
- Current streak computation
- Aggregate totals and favorite exercise selection
- ORM adapters and the profile statistics service
"""
from progresspoint.services.stats.day_keys import to_day_key, unique_sorted_day_keys
from progresspoint.services.stats.engine import (
    aggregate_workouts,
    compute_profile_stats,
    rank_exercises,
)
from progresspoint.services.stats.records import (
    AggregateStats,
    ExerciseFrequency,
    ExerciseInfo,
    FavoriteExercise,
    ProfileStats,
    SetRecord,
    WorkoutExerciseRecord,
    WorkoutRecord,
)
from progresspoint.services.stats.streak import current_streak

__all__ = [
    # Data structures
    "SetRecord",
    "WorkoutExerciseRecord",
    "WorkoutRecord",
    "ExerciseInfo",
    "ExerciseFrequency",
    "FavoriteExercise",
    "AggregateStats",
    "ProfileStats",
    # Day keys and streak
    "to_day_key",
    "unique_sorted_day_keys",
    "current_streak",
    # Engine
    "aggregate_workouts",
    "compute_profile_stats",
    "rank_exercises",
]
