"""
Workouts API endpoints.
"""
import math
import re
from typing import Any, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from progresspoint.core.auth import get_current_user_id
from progresspoint.core.config import settings
from progresspoint.core.database import get_db
from progresspoint.core.logging import get_logger
from progresspoint.services.workouts import (
    ExerciseStore,
    NewSet,
    NewWorkoutExercise,
    WorkoutStore,
)

logger = get_logger(__name__)
router = APIRouter()

_LEADING_INT = re.compile(r"\s*[+-]?\d+")


# ========================================
# Request/Response Schemas
# ========================================

class SetPayload(BaseModel):
    """Single set of a logged exercise."""
    setNumber: int
    repetitions: int
    weight: float


class ExercisePayload(BaseModel):
    """Exercise performed in a logged workout."""
    exerciseId: str
    order: int
    sets: list[SetPayload] = Field(default_factory=list)


class CreateWorkoutRequest(BaseModel):
    """Request to log a new workout. Start time is set by the server."""
    durationMinutes: Optional[int] = Field(None, description="Workout duration in minutes")
    note: Optional[str] = Field(None, description="Free-form note")
    exercises: list[ExercisePayload] = Field(default_factory=list)


class DeleteWorkoutRequest(BaseModel):
    """Request to delete one of the user's workouts."""
    workoutId: Optional[UUID] = None


class PaginationResponse(BaseModel):
    """Pagination metadata."""
    currentPage: int
    totalPages: int
    totalWorkouts: int
    limit: int
    hasNextPage: bool
    hasPreviousPage: bool


class WorkoutListResponse(BaseModel):
    """One page of workouts."""
    workouts: list[dict[str, Any]]
    pagination: PaginationResponse


def _parse_exercise_id(raw_id: str) -> Optional[UUID]:
    try:
        return UUID(raw_id)
    except ValueError:
        return None


def _parse_page_param(raw_value: Optional[str], default: int) -> int:
    """Leading integer of a query value, default when missing or non-numeric."""
    if raw_value is None:
        return default
    match = _LEADING_INT.match(raw_value)
    return int(match.group()) if match else default


# ========================================
# API Endpoints
# ========================================

@router.post("", status_code=201)
async def create_workout(
    request: CreateWorkoutRequest,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Log a new workout with its exercises and sets.
    """
    if not request.durationMinutes or not request.exercises:
        raise HTTPException(status_code=400, detail="Missing required fields")

    if request.durationMinutes < 0:
        raise HTTPException(status_code=400, detail="Duration must not be negative")

    for exercise in request.exercises:
        for s in exercise.sets:
            if s.repetitions < 0 or s.weight < 0:
                raise HTTPException(
                    status_code=400,
                    detail="Repetitions and weight must not be negative",
                )

    # Every referenced exercise must exist in the catalog
    exercise_ids = [_parse_exercise_id(e.exerciseId) for e in request.exercises]
    if any(eid is None for eid in exercise_ids):
        raise HTTPException(status_code=400, detail="One or more exercises not found")
    existing = await ExerciseStore(db).existing_ids(exercise_ids)
    if existing != set(exercise_ids):
        raise HTTPException(status_code=400, detail="One or more exercises not found")

    workout = await WorkoutStore(db).create(
        user_id=user_id,
        duration_minutes=request.durationMinutes,
        note=request.note,
        exercises=[
            NewWorkoutExercise(
                exercise_id=eid,
                order=payload.order,
                sets=[
                    NewSet(
                        set_number=s.setNumber,
                        repetitions=s.repetitions,
                        weight=s.weight,
                    )
                    for s in payload.sets
                ],
            )
            for eid, payload in zip(exercise_ids, request.exercises)
        ],
    )

    logger.info(
        "Workout created",
        workout_id=str(workout.id),
        exercise_count=len(request.exercises),
    )

    return workout.to_dict()


@router.get("", response_model=WorkoutListResponse)
async def list_workouts(
    page_param: Optional[str] = Query(None, alias="page"),
    limit_param: Optional[str] = Query(None, alias="limit"),
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Get one page of the user's workouts, most recent first.
    """
    page = _parse_page_param(page_param, 1)
    limit = _parse_page_param(limit_param, settings.WORKOUTS_DEFAULT_PAGE_SIZE)

    if page < 1:
        raise HTTPException(status_code=400, detail="Page must be at least 1")

    max_limit = settings.WORKOUTS_MAX_PAGE_SIZE
    if limit < 1 or limit > max_limit:
        raise HTTPException(
            status_code=400,
            detail=f"Limit must be between 1 and {max_limit}",
        )

    store = WorkoutStore(db)
    total_workouts = await store.count_for_user(user_id)
    workouts = await store.page_for_user(user_id, page=page, limit=limit)

    total_pages = math.ceil(total_workouts / limit)

    return WorkoutListResponse(
        workouts=[w.to_dict() for w in workouts],
        pagination=PaginationResponse(
            currentPage=page,
            totalPages=total_pages,
            totalWorkouts=total_workouts,
            limit=limit,
            hasNextPage=page < total_pages,
            hasPreviousPage=page > 1,
        ),
    )


@router.delete("")
async def delete_workout(
    request: DeleteWorkoutRequest,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Delete one of the user's workouts.
    """
    if request.workoutId is None:
        raise HTTPException(status_code=400, detail="Missing workoutId in request body")

    store = WorkoutStore(db)
    workout = await store.get(request.workoutId)

    # Other users' workouts are reported as missing
    if not workout or workout.user_id != user_id:
        raise HTTPException(status_code=404, detail="Workout not found")

    await store.delete(workout)

    logger.info("Workout deleted", workout_id=str(request.workoutId))

    return {"message": "Workout deleted successfully"}
