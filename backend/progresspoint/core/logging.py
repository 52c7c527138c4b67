"""
Structured logging configuration.
Designed for easy debugging without exposing user data.
"""
import logging
import sys
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Generator, Optional

import structlog
from structlog.types import Processor

from progresspoint.core.config import settings


def setup_logging() -> None:
    """Configure structured logging for the application."""

    # Common processors
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.LOG_FORMAT == "json":
        # JSON format for production
        renderer = structlog.processors.JSONRenderer()
    else:
        # Console format for development
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Configure root logger
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper()))

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def log_profile_stats(
    logger: structlog.stdlib.BoundLogger,
    user_id: str,
    total_workouts: int,
    current_streak: int,
    duration_ms: float | None = None,
    **extra: Any
) -> None:
    """
    Log a profile statistics summary.
    Logs counts and timing only, NEVER email, username or workout notes.
    """
    logger.info(
        "Profile statistics computed",
        user_id=user_id,
        total_workouts=total_workouts,
        current_streak=current_streak,
        duration_ms=duration_ms,
        **extra
    )


# ========================================
# Statistics Computation Tracking
# ========================================

@dataclass
class StatsRunLog:
    """Complete log entry for one profile statistics run."""
    run_id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    user_id: str = ""

    # Input size
    workout_count: int = 0

    # Result summary
    total_workouts: int = 0
    current_streak: int = 0
    favorite_frequency: int = 0

    # Timing
    start_time: float = 0.0
    end_time: float = 0.0
    duration_ms: float = 0.0

    # Status
    success: bool = True
    error_type: Optional[str] = None
    error_message: Optional[str] = None


class StatsRunTracker:
    """Tracker for a single profile statistics run."""

    def __init__(self, logger: structlog.stdlib.BoundLogger, user_id: str):
        self.logger = logger
        self.log = StatsRunLog(user_id=user_id)

    def start(self) -> None:
        """Mark the start of the run."""
        self.log.start_time = time.time()
        self.logger.debug(
            "Profile statistics started",
            run_id=self.log.run_id,
            user_id=self.log.user_id,
        )

    def set_input(self, workout_count: int) -> None:
        """Record how many workouts were fetched for the run."""
        self.log.workout_count = workout_count

    def set_result(
        self,
        total_workouts: int,
        current_streak: int,
        favorite_frequency: int = 0,
    ) -> None:
        """Record the result summary. favorite_frequency is 0 without a favorite."""
        self.log.total_workouts = total_workouts
        self.log.current_streak = current_streak
        self.log.favorite_frequency = favorite_frequency
        self.log.success = True

    def set_error(self, error_type: str, error_message: str) -> None:
        """Set error information."""
        self.log.success = False
        self.log.error_type = error_type
        self.log.error_message = error_message

    def finish(self) -> None:
        """Mark the end of the run and log summary."""
        self.log.end_time = time.time()
        self.log.duration_ms = (self.log.end_time - self.log.start_time) * 1000

        if self.log.success:
            log_profile_stats(
                self.logger,
                user_id=self.log.user_id,
                total_workouts=self.log.total_workouts,
                current_streak=self.log.current_streak,
                duration_ms=round(self.log.duration_ms, 2),
                run_id=self.log.run_id,
                workout_count=self.log.workout_count,
                favorite_frequency=self.log.favorite_frequency,
            )
        else:
            self.logger.error(
                "Profile statistics failed",
                run_id=self.log.run_id,
                user_id=self.log.user_id,
                duration_ms=round(self.log.duration_ms, 2),
                error_type=self.log.error_type,
                error_message=self.log.error_message,
            )


@contextmanager
def track_stats_run(
    logger: structlog.stdlib.BoundLogger,
    user_id: str,
) -> Generator[StatsRunTracker, None, None]:
    """
    Context manager for tracking a profile statistics run.

    Usage:
        with track_stats_run(logger, user_id) as run:
            run.set_input(len(workouts))
            stats = compute_profile_stats(...)
            run.set_result(stats.total_workouts, stats.current_streak, ...)
    """
    tracker = StatsRunTracker(logger, user_id)
    tracker.start()
    try:
        yield tracker
    except Exception as e:
        tracker.set_error(type(e).__name__, str(e))
        raise
    finally:
        tracker.finish()
