"""
Profile statistics data structures.

Engine inputs are read-only snapshots of already-fetched workout history;
engine outputs are plain aggregate values ready for serialization.
"""
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class SetRecord:
    """Single set: repetitions x weight (unit-agnostic)."""
    repetitions: int
    weight: float


@dataclass(frozen=True)
class WorkoutExerciseRecord:
    """One exercise entry of a workout with its ordered sets."""
    exercise_id: str
    sets: Tuple[SetRecord, ...] = ()


@dataclass(frozen=True)
class WorkoutRecord:
    """
    One workout of a user.

    The engine expects a user's workouts ordered by started_at, most recent
    first. Both "most recent day" and the favorite tie-break rely on it.
    """
    id: str
    user_id: str
    started_at: datetime
    duration_minutes: Optional[int] = None
    exercises: Tuple[WorkoutExerciseRecord, ...] = ()


@dataclass(frozen=True)
class ExerciseInfo:
    """Exercise metadata owned by the exercise catalog."""
    id: str
    name: str
    category: str


# Given an exercise id, return its metadata or None when unknown
ExerciseLookup = Callable[[str], Optional[ExerciseInfo]]

# Reference clock returning the current instant
Clock = Callable[[], datetime]


@dataclass(frozen=True)
class FavoriteExercise:
    """Most frequently performed exercise with its display metadata."""
    id: str
    name: str
    category: str
    frequency: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
        }


@dataclass(frozen=True)
class ExerciseFrequency:
    """How many workout entries used an exercise, and when it was first seen."""
    exercise_id: str
    count: int
    first_seen: int


@dataclass(frozen=True)
class AggregateStats:
    """Training totals over a user's full workout history."""
    total_workouts: int = 0
    total_duration: int = 0
    total_sets: int = 0
    total_reps: int = 0
    total_volume: float = 0.0
    total_exercises_used: int = 0
    heaviest_weight: float = 0.0
    favorite_exercise: Optional[FavoriteExercise] = None


@dataclass(frozen=True)
class ProfileStats:
    """
    Result of one profile statistics run.

    `user` is passed through untouched from the caller.
    """
    current_streak: int
    days: List[date]
    aggregates: AggregateStats
    user: Optional[Dict[str, Any]] = None
    computed_at: Optional[datetime] = None

    @property
    def last_workout_date(self) -> Optional[date]:
        return self.days[0] if self.days else None

    @property
    def total_workouts(self) -> int:
        return self.aggregates.total_workouts

    @property
    def favorite_exercise(self) -> Optional[FavoriteExercise]:
        return self.aggregates.favorite_exercise

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API response."""
        agg = self.aggregates
        last_day = self.last_workout_date
        return {
            "user": self.user,
            "totalWorkouts": agg.total_workouts,
            "currentStreak": self.current_streak,
            "days": [day.isoformat() for day in self.days],
            "lastWorkoutDate": last_day.isoformat() if last_day else None,
            "totalDuration": agg.total_duration,
            "totalExercisesUsed": agg.total_exercises_used,
            "totalSets": agg.total_sets,
            "totalReps": agg.total_reps,
            "totalVolume": agg.total_volume,
            "heaviestWeight": agg.heaviest_weight,
            "favoriteExercise": (
                agg.favorite_exercise.to_dict() if agg.favorite_exercise else None
            ),
        }
