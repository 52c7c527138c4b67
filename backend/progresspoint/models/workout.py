"""
Workout database models.

A workout owns an ordered list of exercises, each owning an ordered list of sets:
- Workout: one training session of a user
- WorkoutExercise: one exercise performed in the session
- WorkoutSet: one set (repetitions x weight) of that exercise
"""
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from progresspoint.core.database import Base
from progresspoint.models.exercise import Exercise


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Workout(Base):
    """Workout session stored in database."""

    __tablename__ = "workouts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        index=True
    )
    duration_minutes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_template: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow
    )

    workout_exercises: Mapped[List["WorkoutExercise"]] = relationship(
        back_populates="workout",
        cascade="all, delete-orphan",
        order_by="WorkoutExercise.order",
    )

    def to_dict(self) -> dict:
        """Convert to dictionary for API response. Nested rows must be loaded."""
        return {
            "id": str(self.id),
            "userId": str(self.user_id),
            "startedAt": self.started_at.isoformat(),
            "durationMinutes": self.duration_minutes,
            "note": self.note,
            "isTemplate": self.is_template,
            "workoutExercises": [we.to_dict() for we in self.workout_exercises],
        }


class WorkoutExercise(Base):
    """Exercise performed within a workout."""

    __tablename__ = "workout_exercises"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4
    )
    workout_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("workouts.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    exercise_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("exercises.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    workout: Mapped[Workout] = relationship(back_populates="workout_exercises")
    exercise: Mapped[Exercise] = relationship()
    sets: Mapped[List["WorkoutSet"]] = relationship(
        back_populates="workout_exercise",
        cascade="all, delete-orphan",
        order_by="WorkoutSet.set_number",
    )

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "id": str(self.id),
            "exerciseId": str(self.exercise_id),
            "order": self.order,
            "exercise": self.exercise.to_dict() if self.exercise else None,
            "sets": [s.to_dict() for s in self.sets],
        }


class WorkoutSet(Base):
    """Single set of an exercise."""

    __tablename__ = "workout_sets"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4
    )
    workout_exercise_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("workout_exercises.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    set_number: Mapped[int] = mapped_column(Integer, nullable=False)
    repetitions: Mapped[int] = mapped_column(Integer, nullable=False)
    weight: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    workout_exercise: Mapped[WorkoutExercise] = relationship(back_populates="sets")

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "setNumber": self.set_number,
            "repetitions": self.repetitions,
            "weight": self.weight,
        }
