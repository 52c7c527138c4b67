"""
Profile Stats Engine - Streak and training totals for one user.

Pure computation over already-fetched workout history:
- Day keys and current streak
- Totals (workouts, duration, sets, reps, volume)
- Heaviest set and favorite exercise
"""
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Dict, Iterable, List, Optional, Sequence

from progresspoint.core.logging import get_logger
from progresspoint.services.stats.day_keys import UTC, to_day_key, unique_sorted_day_keys
from progresspoint.services.stats.records import (
    AggregateStats,
    Clock,
    ExerciseFrequency,
    ExerciseLookup,
    FavoriteExercise,
    ProfileStats,
    WorkoutRecord,
)
from progresspoint.services.stats.streak import current_streak

logger = get_logger(__name__)


def utc_now() -> datetime:
    """Default reference clock."""
    return datetime.now(UTC)


@dataclass
class _ExerciseTally:
    """Occurrences of one exercise and the rank at which it was first seen."""
    first_seen: int
    count: int = 0


class _HistoryAccumulator:
    """
    Running totals for a single pass over a user's workouts.

    Created fresh for every run and discarded with it.
    """

    def __init__(self) -> None:
        self.total_workouts = 0
        self.total_duration = 0
        self.total_sets = 0
        self.total_reps = 0
        self.total_volume: float = 0
        self.heaviest_weight: float = 0
        self._tallies: Dict[str, _ExerciseTally] = {}

    def add(self, workout: WorkoutRecord) -> None:
        self.total_workouts += 1
        self.total_duration += workout.duration_minutes or 0

        for entry in workout.exercises:
            tally = self._tallies.get(entry.exercise_id)
            if tally is None:
                tally = _ExerciseTally(first_seen=len(self._tallies))
                self._tallies[entry.exercise_id] = tally
            # Once per workout entry, not per set
            tally.count += 1

            self.total_sets += len(entry.sets)
            for s in entry.sets:
                self.total_reps += s.repetitions
                self.total_volume += s.repetitions * s.weight
                if s.weight > self.heaviest_weight:
                    self.heaviest_weight = s.weight

    @property
    def distinct_exercises(self) -> int:
        return len(self._tallies)

    def ranking(self) -> List[ExerciseFrequency]:
        """Exercises by count descending, earlier first-seen winning ties."""
        ranked = sorted(
            self._tallies.items(),
            key=lambda item: (-item[1].count, item[1].first_seen),
        )
        return [
            ExerciseFrequency(
                exercise_id=exercise_id,
                count=tally.count,
                first_seen=tally.first_seen,
            )
            for exercise_id, tally in ranked
        ]


def _accumulate(workouts: Iterable[WorkoutRecord]) -> _HistoryAccumulator:
    acc = _HistoryAccumulator()
    for workout in workouts:
        acc.add(workout)
    return acc


def rank_exercises(workouts: Iterable[WorkoutRecord]) -> List[ExerciseFrequency]:
    """
    Rank exercises by how many workout entries used them.

    Args:
        workouts: User workouts, most recent first

    Returns:
        Frequencies ordered by count descending, then by first appearance
    """
    return _accumulate(workouts).ranking()


def _resolve_favorite(
    ranking: List[ExerciseFrequency],
    lookup_exercise: ExerciseLookup,
) -> Optional[FavoriteExercise]:
    if not ranking:
        return None

    top = ranking[0]
    info = lookup_exercise(top.exercise_id)
    if info is None:
        logger.warning(
            "Favorite exercise has no metadata, omitting it",
            exercise_id=top.exercise_id,
        )
        return None

    return FavoriteExercise(
        id=info.id,
        name=info.name,
        category=info.category,
        frequency=top.count,
    )


def aggregate_workouts(
    workouts: Iterable[WorkoutRecord],
    lookup_exercise: ExerciseLookup,
) -> AggregateStats:
    """
    Compute training totals and the favorite exercise in one pass.

    Args:
        workouts: User workouts, most recent first
        lookup_exercise: Exercise metadata lookup

    Returns:
        AggregateStats, all zeros and no favorite for an empty history
    """
    acc = _accumulate(workouts)

    return AggregateStats(
        total_workouts=acc.total_workouts,
        total_duration=acc.total_duration,
        total_sets=acc.total_sets,
        total_reps=acc.total_reps,
        total_volume=acc.total_volume,
        total_exercises_used=acc.distinct_exercises,
        heaviest_weight=acc.heaviest_weight,
        favorite_exercise=_resolve_favorite(acc.ranking(), lookup_exercise),
    )


def compute_profile_stats(
    workouts: Sequence[WorkoutRecord],
    lookup_exercise: ExerciseLookup,
    clock: Clock = utc_now,
    tz: tzinfo = UTC,
    user: Optional[dict] = None,
) -> ProfileStats:
    """
    Compute the full profile statistics for one user.

    Usage:
        stats = compute_profile_stats(
            workouts=records,
            lookup_exercise=catalog.get,
            tz=settings.get_stats_timezone(),
        )

    Args:
        workouts: User workouts, most recent first
        lookup_exercise: Exercise metadata lookup
        clock: Reference clock, read exactly once
        tz: Reference timezone for day keys
        user: Caller's user payload, passed through

    Returns:
        ProfileStats with streak, day keys and aggregates
    """
    now = clock()
    today = to_day_key(now, tz)

    days = unique_sorted_day_keys((w.started_at for w in workouts), tz)
    streak = current_streak(days, today)

    logger.debug(
        "Computed day keys",
        day_count=len(days),
        today=today.isoformat(),
        current_streak=streak,
    )

    return ProfileStats(
        current_streak=streak,
        days=days,
        aggregates=aggregate_workouts(workouts, lookup_exercise),
        user=user,
        computed_at=now,
    )
