"""
Exercise catalog API endpoints.
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from progresspoint.core.database import get_db
from progresspoint.services.workouts import ExerciseStore

router = APIRouter()


class ExerciseResponse(BaseModel):
    """Exercise catalog entry."""
    id: str
    name: str
    category: str


@router.get("", response_model=list[ExerciseResponse])
async def list_exercises(
    db: AsyncSession = Depends(get_db),
):
    """
    Get all exercises ordered by name.
    """
    exercises = await ExerciseStore(db).list_all()
    return [ExerciseResponse(**e.to_dict()) for e in exercises]
