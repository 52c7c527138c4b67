"""
Workout Stores - Database operations for users, exercises and workouts.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence, Set

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from progresspoint.core.logging import get_logger
from progresspoint.models import Exercise, User, Workout, WorkoutExercise, WorkoutSet

logger = get_logger(__name__)


@dataclass
class NewSet:
    """Set to be stored with a new workout."""
    set_number: int
    repetitions: int
    weight: float


@dataclass
class NewWorkoutExercise:
    """Exercise entry to be stored with a new workout."""
    exercise_id: uuid.UUID
    order: int
    sets: List[NewSet] = field(default_factory=list)


def _with_details():
    """Eager-load exercises, their metadata and sets."""
    return selectinload(Workout.workout_exercises).options(
        selectinload(WorkoutExercise.exercise),
        selectinload(WorkoutExercise.sets),
    )


class UserStore:
    """Database store for user accounts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, user_id: uuid.UUID) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()


class ExerciseStore:
    """Database store for the exercise catalog."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> Sequence[Exercise]:
        result = await self.db.execute(select(Exercise).order_by(Exercise.name))
        return result.scalars().all()

    async def get_many(self, exercise_ids: Iterable[uuid.UUID]) -> Sequence[Exercise]:
        """Get exercises by id. Unknown ids are skipped."""
        ids = set(exercise_ids)
        if not ids:
            return []
        result = await self.db.execute(select(Exercise).where(Exercise.id.in_(ids)))
        return result.scalars().all()

    async def existing_ids(self, exercise_ids: Iterable[uuid.UUID]) -> Set[uuid.UUID]:
        ids = set(exercise_ids)
        if not ids:
            return set()
        result = await self.db.execute(select(Exercise.id).where(Exercise.id.in_(ids)))
        return set(result.scalars().all())


class WorkoutStore:
    """
    Database store for workouts.

    All listings are ordered by start time, most recent first.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_user(self, user_id: uuid.UUID) -> Sequence[Workout]:
        """Get the full workout history of a user with nested detail."""
        result = await self.db.execute(
            select(Workout)
            .where(Workout.user_id == user_id)
            .order_by(Workout.started_at.desc(), Workout.created_at.desc())
            .options(_with_details())
        )
        return result.scalars().all()

    async def count_for_user(self, user_id: uuid.UUID) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(Workout).where(Workout.user_id == user_id)
        )
        return result.scalar_one()

    async def page_for_user(
        self,
        user_id: uuid.UUID,
        page: int,
        limit: int,
    ) -> Sequence[Workout]:
        """
        Get one page of a user's workouts.

        Args:
            user_id: Owner of the workouts
            page: 1-based page number
            limit: Page size

        Returns:
            Workouts of the requested page
        """
        result = await self.db.execute(
            select(Workout)
            .where(Workout.user_id == user_id)
            .order_by(Workout.started_at.desc(), Workout.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .options(_with_details())
        )
        return result.scalars().all()

    async def get(self, workout_id: uuid.UUID) -> Optional[Workout]:
        result = await self.db.execute(
            select(Workout)
            .where(Workout.id == workout_id)
            .options(_with_details())
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create(
        self,
        user_id: uuid.UUID,
        duration_minutes: int,
        exercises: List[NewWorkoutExercise],
        note: Optional[str] = None,
        started_at: Optional[datetime] = None,
    ) -> Workout:
        """
        Create a workout with its exercises and sets.

        started_at defaults to the current instant.
        """
        workout = Workout(
            user_id=user_id,
            started_at=started_at or datetime.now(timezone.utc),
            duration_minutes=duration_minutes,
            note=note,
            workout_exercises=[
                WorkoutExercise(
                    exercise_id=entry.exercise_id,
                    order=entry.order,
                    sets=[
                        WorkoutSet(
                            set_number=s.set_number,
                            repetitions=s.repetitions,
                            weight=s.weight,
                        )
                        for s in entry.sets
                    ],
                )
                for entry in exercises
            ],
        )
        self.db.add(workout)
        await self.db.flush()

        logger.debug("Workout stored", workout_id=str(workout.id))

        # Reload with nested detail for the response
        return await self.get(workout.id)

    async def delete(self, workout: Workout) -> None:
        await self.db.delete(workout)
        await self.db.flush()
