"""
Profile API endpoints.
"""
from typing import Any, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from progresspoint.core.auth import get_current_user_id
from progresspoint.core.database import get_db
from progresspoint.core.logging import get_logger
from progresspoint.services.stats.service import ProfileStatsService

logger = get_logger(__name__)
router = APIRouter()


# ========================================
# Response Schemas
# ========================================

class FavoriteExerciseResponse(BaseModel):
    """Most frequently performed exercise."""
    id: str
    name: str
    category: str


class ProfileResponse(BaseModel):
    """Profile with training statistics."""
    user: Optional[dict[str, Any]]
    totalWorkouts: int
    currentStreak: int
    days: list[str]
    lastWorkoutDate: Optional[str]
    totalDuration: int
    totalExercisesUsed: int
    totalSets: int
    totalReps: int
    totalVolume: float
    heaviestWeight: float
    favoriteExercise: Optional[FavoriteExerciseResponse]


# ========================================
# API Endpoints
# ========================================

@router.get("", response_model=ProfileResponse)
async def get_profile(
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Get the authenticated user's profile and training statistics.
    """
    try:
        service = ProfileStatsService(db)
        stats = await service.get_profile_stats(user_id)
    except Exception as e:
        logger.error("Error fetching user profile", error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")

    return ProfileResponse(**stats.to_dict())
