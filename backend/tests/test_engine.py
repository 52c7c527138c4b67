"""
Tests for the profile statistics engine — totals, favorite exercise, streak wiring.
"""
import random
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from progresspoint.services.stats import (
    ExerciseInfo,
    SetRecord,
    WorkoutExerciseRecord,
    WorkoutRecord,
    aggregate_workouts,
    compute_profile_stats,
    rank_exercises,
)

UTC = timezone.utc

CATALOG = {
    "bench": ExerciseInfo(id="bench", name="Bench Press", category="Chest"),
    "squat": ExerciseInfo(id="squat", name="Squat", category="Legs"),
    "row": ExerciseInfo(id="row", name="Barbell Row", category="Back"),
}


def workout(started_at, *entries, duration=60, wid=None):
    """Build a WorkoutRecord from (exercise_id, [(reps, weight), ...]) entries."""
    return WorkoutRecord(
        id=wid or started_at.isoformat(),
        user_id="u1",
        started_at=started_at,
        duration_minutes=duration,
        exercises=tuple(
            WorkoutExerciseRecord(
                exercise_id=exercise_id,
                sets=tuple(SetRecord(repetitions=r, weight=w) for r, w in sets),
            )
            for exercise_id, sets in entries
        ),
    )


class TestAggregateWorkouts:

    def test_empty_history(self):
        stats = aggregate_workouts([], CATALOG.get)
        assert stats.total_workouts == 0
        assert stats.total_duration == 0
        assert stats.total_sets == 0
        assert stats.total_reps == 0
        assert stats.total_volume == 0
        assert stats.total_exercises_used == 0
        assert stats.heaviest_weight == 0
        assert stats.favorite_exercise is None

    def test_totals(self, fixed_now):
        workouts = [
            workout(fixed_now, ("bench", [(10, 50), (8, 55)]), duration=45),
            workout(fixed_now - timedelta(days=1), ("squat", [(5, 100)]), ("bench", [(12, 40)]), duration=70),
        ]
        stats = aggregate_workouts(workouts, CATALOG.get)
        assert stats.total_workouts == 2
        assert stats.total_duration == 115
        assert stats.total_sets == 4
        assert stats.total_reps == 35
        assert stats.total_volume == 500 + 440 + 500 + 480
        assert stats.total_exercises_used == 2
        assert stats.heaviest_weight == 100

    def test_missing_duration_counts_as_zero(self, fixed_now):
        workouts = [
            workout(fixed_now, ("bench", [(1, 1)]), duration=None),
            workout(fixed_now, ("bench", [(1, 1)]), duration=30),
        ]
        assert aggregate_workouts(workouts, CATALOG.get).total_duration == 30

    def test_workouts_without_sets(self, fixed_now):
        workouts = [workout(fixed_now, ("bench", []), ("squat", []))]
        stats = aggregate_workouts(workouts, CATALOG.get)
        assert stats.total_sets == 0
        assert stats.heaviest_weight == 0
        assert stats.total_exercises_used == 2
        assert stats.favorite_exercise.id == "bench"

    def test_volume_ignores_set_and_exercise_order(self, fixed_now):
        entries = [
            ("bench", [(10, 50), (8, 55), (6, 60)]),
            ("squat", [(5, 100.5), (5, 102.5)]),
            ("row", [(12, 40)]),
        ]
        baseline = aggregate_workouts([workout(fixed_now, *entries)], CATALOG.get).total_volume

        rng = random.Random(7)
        for _ in range(10):
            shuffled = [(eid, rng.sample(sets, len(sets))) for eid, sets in entries]
            rng.shuffle(shuffled)
            stats = aggregate_workouts([workout(fixed_now, *shuffled)], CATALOG.get)
            assert stats.total_volume == pytest.approx(baseline)


class TestFavoriteExercise:

    def test_most_frequent_wins(self, fixed_now):
        workouts = [
            workout(fixed_now, ("bench", [(5, 50)])),
            workout(fixed_now - timedelta(days=1), ("squat", [(5, 100)])),
            workout(fixed_now - timedelta(days=2), ("squat", [(5, 100)])),
        ]
        favorite = aggregate_workouts(workouts, CATALOG.get).favorite_exercise
        assert favorite.id == "squat"
        assert favorite.name == "Squat"
        assert favorite.category == "Legs"
        assert favorite.frequency == 2

    def test_counts_entries_not_sets(self, fixed_now):
        """Many sets in one workout do not beat appearing in more workouts."""
        workouts = [
            workout(fixed_now, ("bench", [(5, 50)] * 10)),
            workout(fixed_now - timedelta(days=1), ("squat", [(5, 100)])),
            workout(fixed_now - timedelta(days=2), ("squat", [(5, 100)])),
        ]
        assert aggregate_workouts(workouts, CATALOG.get).favorite_exercise.id == "squat"

    def test_tie_goes_to_first_encountered(self, fixed_now):
        """Both appear twice; squat shows up first in most-recent-first order."""
        workouts = [
            workout(fixed_now, ("squat", [(1, 20)]), ("bench", [(20, 150)])),
            workout(fixed_now - timedelta(days=1), ("bench", [(20, 150)])),
            workout(fixed_now - timedelta(days=2), ("squat", [(1, 20)])),
        ]
        favorite = aggregate_workouts(workouts, CATALOG.get).favorite_exercise
        assert favorite.id == "squat"

    def test_tie_break_follows_input_order(self, fixed_now):
        workouts = [
            workout(fixed_now, ("bench", [(1, 1)])),
            workout(fixed_now - timedelta(days=1), ("squat", [(1, 1)])),
        ]
        assert aggregate_workouts(workouts, CATALOG.get).favorite_exercise.id == "bench"
        assert aggregate_workouts(list(reversed(workouts)), CATALOG.get).favorite_exercise.id == "squat"

    def test_missing_metadata_omits_favorite(self, fixed_now):
        workouts = [workout(fixed_now, ("deleted-exercise", [(5, 50)]))]
        stats = aggregate_workouts(workouts, CATALOG.get)
        assert stats.favorite_exercise is None
        assert stats.total_exercises_used == 1
        assert stats.total_reps == 5

    def test_ranking(self, fixed_now):
        workouts = [
            workout(fixed_now, ("row", [(1, 1)]), ("bench", [(1, 1)])),
            workout(fixed_now - timedelta(days=1), ("squat", [(1, 1)]), ("bench", [(1, 1)])),
            workout(fixed_now - timedelta(days=2), ("squat", [(1, 1)])),
        ]
        ranking = rank_exercises(workouts)
        assert [(f.exercise_id, f.count) for f in ranking] == [
            ("bench", 2),
            ("squat", 2),
            ("row", 1),
        ]
        assert [f.first_seen for f in ranking] == [1, 2, 0]


class TestComputeProfileStats:

    def test_example_history(self, fixed_now):
        """Two workouts today, one yesterday."""
        workouts = [
            workout(fixed_now - timedelta(hours=1), ("bench", [(10, 50)])),
            workout(fixed_now - timedelta(hours=5), ("bench", [(8, 55)])),
            workout(fixed_now - timedelta(days=1), ("squat", [(12, 80)])),
        ]
        stats = compute_profile_stats(workouts, CATALOG.get, clock=lambda: fixed_now)

        assert stats.days == [date(2025, 3, 10), date(2025, 3, 9)]
        assert stats.last_workout_date == date(2025, 3, 10)
        assert stats.current_streak == 2
        assert stats.total_workouts == 3
        assert stats.aggregates.total_sets == 3
        assert stats.aggregates.total_reps == 30
        assert stats.aggregates.total_volume == 1900
        assert stats.aggregates.heaviest_weight == 80
        assert stats.favorite_exercise.id == "bench"

    def test_empty_history(self, fixed_now):
        stats = compute_profile_stats([], CATALOG.get, clock=lambda: fixed_now)
        assert stats.current_streak == 0
        assert stats.days == []
        assert stats.last_workout_date is None
        assert stats.favorite_exercise is None

        payload = stats.to_dict()
        assert payload["totalWorkouts"] == 0
        assert payload["heaviestWeight"] == 0
        assert payload["totalVolume"] == 0
        assert payload["lastWorkoutDate"] is None
        assert payload["favoriteExercise"] is None

    def test_stale_history_has_no_streak(self, fixed_now):
        workouts = [
            workout(fixed_now - timedelta(days=3), ("bench", [(5, 50)])),
            workout(fixed_now - timedelta(days=4), ("bench", [(5, 50)])),
        ]
        stats = compute_profile_stats(workouts, CATALOG.get, clock=lambda: fixed_now)
        assert stats.current_streak == 0
        assert stats.total_workouts == 2

    def test_clock_read_once(self, fixed_now):
        calls = []

        def clock():
            calls.append(1)
            return fixed_now

        workouts = [workout(fixed_now, ("bench", [(5, 50)]))]
        stats = compute_profile_stats(workouts, CATALOG.get, clock=clock)
        assert len(calls) == 1
        assert stats.computed_at == fixed_now

    def test_reference_timezone_decides_the_day(self):
        """A late-evening UTC workout already falls on the next calendar day in Tokyo."""
        now = datetime(2025, 3, 11, 1, 0, tzinfo=UTC)  # 10:00 in Tokyo
        workouts = [workout(datetime(2025, 3, 9, 23, 30, tzinfo=UTC), ("bench", [(5, 50)]))]

        in_utc = compute_profile_stats(workouts, CATALOG.get, clock=lambda: now, tz=UTC)
        in_tokyo = compute_profile_stats(
            workouts, CATALOG.get, clock=lambda: now, tz=ZoneInfo("Asia/Tokyo")
        )

        assert in_utc.days == [date(2025, 3, 9)]
        assert in_utc.current_streak == 0
        assert in_tokyo.days == [date(2025, 3, 10)]
        assert in_tokyo.current_streak == 1

    def test_user_passed_through(self, fixed_now):
        user = {"id": "u1", "username": "alice"}
        stats = compute_profile_stats([], CATALOG.get, clock=lambda: fixed_now, user=user)
        assert stats.to_dict()["user"] is user

    def test_to_dict_shape(self, fixed_now):
        workouts = [workout(fixed_now, ("row", [(10, 40)]), duration=30)]
        payload = compute_profile_stats(workouts, CATALOG.get, clock=lambda: fixed_now).to_dict()
        assert payload == {
            "user": None,
            "totalWorkouts": 1,
            "currentStreak": 1,
            "days": ["2025-03-10"],
            "lastWorkoutDate": "2025-03-10",
            "totalDuration": 30,
            "totalExercisesUsed": 1,
            "totalSets": 1,
            "totalReps": 10,
            "totalVolume": 400,
            "heaviestWeight": 40,
            "favoriteExercise": {"id": "row", "name": "Barbell Row", "category": "Back"},
        }
