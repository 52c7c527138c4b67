"""
Streak computation over normalized day keys.
"""
from datetime import date, timedelta
from typing import Sequence

ONE_DAY = timedelta(days=1)


def current_streak(day_keys: Sequence[date], today: date) -> int:
    """
    Count consecutive active days ending today or yesterday.

    Args:
        day_keys: Unique days, most recent first
        today: Current day in the reference timezone

    Returns:
        Length of the live streak, 0 when the latest activity is older
        than yesterday
    """
    if not day_keys:
        return 0

    most_recent = day_keys[0]
    if most_recent != today and most_recent != today - ONE_DAY:
        return 0

    streak = 1
    expected = most_recent - ONE_DAY
    for day in day_keys[1:]:
        if day != expected:
            break
        streak += 1
        expected = day - ONE_DAY

    return streak
