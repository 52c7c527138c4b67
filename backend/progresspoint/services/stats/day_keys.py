"""
Day-Key Normalizer - Truncate workout timestamps to calendar days.

All truncation happens in one explicit reference timezone so that two
workouts on the same calendar day always collapse to the same key.
"""
from datetime import date, datetime, timezone, tzinfo
from typing import Iterable, List

UTC = timezone.utc


def to_day_key(timestamp: datetime, tz: tzinfo = UTC) -> date:
    """
    Convert a timestamp to its calendar day in the reference timezone.

    Naive timestamps are interpreted as UTC.
    """
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    return timestamp.astimezone(tz).date()


def unique_sorted_day_keys(
    timestamps: Iterable[datetime],
    tz: tzinfo = UTC,
) -> List[date]:
    """
    Deduplicate timestamps by calendar day, most recent day first.

    Args:
        timestamps: Workout start instants in any order
        tz: Reference timezone for day truncation

    Returns:
        Strictly descending list of days, empty for empty input
    """
    return sorted({to_day_key(ts, tz) for ts in timestamps}, reverse=True)
