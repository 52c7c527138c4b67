"""
ORM Adapters - Convert database rows into engine records.

The engine works only with the frozen records in `records.py`; this module
is the single place that knows about the SQLAlchemy models.
"""
from typing import Dict, Iterable, List, Mapping, Optional

from progresspoint.models import Exercise, Workout
from progresspoint.services.stats.records import (
    ExerciseInfo,
    SetRecord,
    WorkoutExerciseRecord,
    WorkoutRecord,
)


def workout_to_record(workout: Workout) -> WorkoutRecord:
    """
    Convert a workout with loaded exercises and sets to a WorkoutRecord.

    Entry and set order follow the relationship ordering.
    """
    return WorkoutRecord(
        id=str(workout.id),
        user_id=str(workout.user_id),
        started_at=workout.started_at,
        duration_minutes=workout.duration_minutes,
        exercises=tuple(
            WorkoutExerciseRecord(
                exercise_id=str(we.exercise_id),
                sets=tuple(
                    SetRecord(repetitions=s.repetitions, weight=s.weight)
                    for s in we.sets
                ),
            )
            for we in workout.workout_exercises
        ),
    )


def workouts_to_records(workouts: Iterable[Workout]) -> List[WorkoutRecord]:
    """Convert workouts keeping their order."""
    return [workout_to_record(w) for w in workouts]


def referenced_exercise_ids(records: Iterable[WorkoutRecord]) -> List[str]:
    """Distinct exercise ids used by the records, in first-seen order."""
    seen: Dict[str, None] = {}
    for record in records:
        for entry in record.exercises:
            seen.setdefault(entry.exercise_id, None)
    return list(seen)


class ExerciseCatalog:
    """
    In-memory exercise metadata lookup.

    Usage:
        catalog = ExerciseCatalog.from_models(exercises)
        info = catalog.get("0b0e...")  # ExerciseInfo or None
    """

    def __init__(self, entries: Mapping[str, ExerciseInfo]):
        self._entries = dict(entries)

    @classmethod
    def from_models(cls, exercises: Iterable[Exercise]) -> "ExerciseCatalog":
        return cls({
            str(e.id): ExerciseInfo(id=str(e.id), name=e.name, category=e.category)
            for e in exercises
        })

    def get(self, exercise_id: str) -> Optional[ExerciseInfo]:
        return self._entries.get(exercise_id)
