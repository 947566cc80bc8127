"""
Re-derive a card's scheduling state from its review history.

Logs record the effective review time, so replaying their ratings in order
through the same scheduler reproduces the persisted card exactly.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Mapping

from revisit.fsrs.constants import Rating
from revisit.fsrs.memory_state import CardState, create_empty_card
from revisit.fsrs.scheduler import Scheduler


def replay_card(
    logs: Iterable[Mapping],
    created_at: datetime,
    scheduler: Scheduler
) -> CardState:
    """
    Rebuild a card by applying every logged review to a fresh card.

    Args:
        logs: Review-log dicts with ``rating`` and ``review`` keys
        created_at: When the card was created (its initial due date)
        scheduler: Scheduler configured as when the reviews happened

    Returns:
        The card state after the last logged review
    """
    card = create_empty_card(created_at)
    for log in sorted(logs, key=lambda entry: entry["review"]):
        card, _ = scheduler.schedule(card, Rating(log["rating"]), log["review"])
    return card
