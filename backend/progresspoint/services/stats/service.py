"""
Profile Stats Service - Fetch a user's history and run the stats engine.

Orchestrates:
- Loading user, workouts and exercise metadata
- Adapting ORM rows to engine records
- Running the engine and logging a summary
"""
import uuid
from datetime import tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from sqlalchemy.ext.asyncio import AsyncSession

from progresspoint.core.config import settings
from progresspoint.core.logging import get_logger, track_stats_run
from progresspoint.services.stats.adapter import (
    ExerciseCatalog,
    referenced_exercise_ids,
    workouts_to_records,
)
from progresspoint.services.stats.engine import compute_profile_stats, utc_now
from progresspoint.services.stats.records import Clock, ProfileStats
from progresspoint.services.workouts import ExerciseStore, UserStore, WorkoutStore

logger = get_logger(__name__)


def _configured_timezone() -> ZoneInfo:
    tz = settings.get_stats_timezone()
    if tz.key != settings.STATS_TIMEZONE:
        logger.warning(
            "Unknown stats timezone, falling back to UTC",
            configured=settings.STATS_TIMEZONE,
        )
    return tz


class ProfileStatsService:
    """
    Profile statistics for the authenticated user.

    Usage:
        service = ProfileStatsService(db)
        stats = await service.get_profile_stats(user_id)
    """

    def __init__(
        self,
        db: AsyncSession,
        clock: Optional[Clock] = None,
        tz: Optional[tzinfo] = None,
    ):
        self.db = db
        self.clock = clock or utc_now
        self.tz = tz or _configured_timezone()
        self.users = UserStore(db)
        self.workouts = WorkoutStore(db)
        self.exercises = ExerciseStore(db)

    async def get_profile_stats(self, user_id: uuid.UUID) -> ProfileStats:
        """
        Compute profile statistics for a user.

        Args:
            user_id: Authenticated user ID

        Returns:
            ProfileStats with the user payload passed through
        """
        with track_stats_run(logger, str(user_id)) as run:
            user = await self.users.get(user_id)
            rows = await self.workouts.list_for_user(user_id)
            records = workouts_to_records(rows)
            run.set_input(len(records))

            exercise_ids = [uuid.UUID(eid) for eid in referenced_exercise_ids(records)]
            catalog = ExerciseCatalog.from_models(
                await self.exercises.get_many(exercise_ids)
            )

            stats = compute_profile_stats(
                records,
                lookup_exercise=catalog.get,
                clock=self.clock,
                tz=self.tz,
                user=user.to_dict() if user else None,
            )
            run.set_result(
                total_workouts=stats.total_workouts,
                current_streak=stats.current_streak,
                favorite_frequency=(
                    stats.favorite_exercise.frequency if stats.favorite_exercise else 0
                ),
            )

        return stats
