"""
Due-set selection for building a review queue.

A card surfaces when its due date falls on or before the end of the
current UTC day and it has not already been reviewed earlier today.
Cards due later today are already included.
"""

from __future__ import annotations

from datetime import datetime, time, timezone
from typing import Iterable, Optional, Protocol, TypeVar


class CardSummary(Protocol):
    """Anything with a due date and an optional last-review timestamp."""
    due: datetime
    last_review: Optional[datetime]


SummaryT = TypeVar("SummaryT", bound=CardSummary)


def start_of_day(now: datetime) -> datetime:
    """Midnight UTC at the start of ``now``'s UTC calendar day."""
    day = now.astimezone(timezone.utc).date()
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def end_of_day(now: datetime) -> datetime:
    """Last representable instant of ``now``'s UTC calendar day."""
    day = now.astimezone(timezone.utc).date()
    return datetime.combine(day, time.max, tzinfo=timezone.utc)


def due_window(now: datetime) -> tuple[datetime, datetime]:
    """
    Bounds of the due predicate for ``now``.

    Returns:
        (reviewed_before, due_by): a card is due when
        ``due <= due_by`` and it was never reviewed or
        ``last_review < reviewed_before``
    """
    return start_of_day(now), end_of_day(now)


def is_due(card: CardSummary, now: datetime) -> bool:
    reviewed_before, due_by = due_window(now)
    if card.due > due_by:
        return False
    return card.last_review is None or card.last_review < reviewed_before


def select_due(cards: Iterable[SummaryT], now: datetime) -> list[SummaryT]:
    """
    Pick the cards to review today, soonest due first.

    Recomputed on every call; ties keep the input order.

    Args:
        cards: Card summaries for one user
        now: Reference time (any timezone, compared in UTC)

    Returns:
        Due cards sorted ascending by due
    """
    due_cards = [card for card in cards if is_due(card, now)]
    due_cards.sort(key=lambda card: card.due)
    return due_cards
