"""
Adaptive refresh policy for views that display due cards.

The due set is recomputed on a timer whose period shrinks as any card's
due time approaches:
- within 1 hour: every 30 seconds
- within 1 day: every 5 minutes
- otherwise: every 30 minutes
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable

THIRTY_SECONDS = timedelta(seconds=30)
FIVE_MINUTES = timedelta(minutes=5)
THIRTY_MINUTES = timedelta(minutes=30)
ONE_HOUR = timedelta(hours=1)
ONE_DAY = timedelta(days=1)


def get_due_refresh_interval(due: datetime, now: datetime) -> timedelta:
    """Refresh period for a single card, by distance to its due time."""
    distance = abs(due - now)
    if distance < ONE_HOUR:
        return THIRTY_SECONDS
    if distance < ONE_DAY:
        return FIVE_MINUTES
    return THIRTY_MINUTES


def get_next_due_refresh(dues: Iterable[datetime], now: datetime) -> timedelta:
    """
    Delay before the due set should be recomputed.

    Args:
        dues: Due timestamps of every card in view
        now: Current time

    Returns:
        The shortest per-card interval, or 30 minutes when nothing is in view
    """
    shortest = THIRTY_MINUTES
    for due in dues:
        shortest = min(shortest, get_due_refresh_interval(due, now))
        if shortest == THIRTY_SECONDS:
            break
    return shortest
