"""
Memory State - FSRS Card State and Retrievability

Defines the core memory state variables and derived quantities for FSRS.

Key concepts:
- Stability (S): Days until recall probability decays to 90%
- Difficulty (D): How hard the problem is for this user (1-10 scale)
- Retrievability (R): Probability of successful recall at time t
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from revisit.errors import InvalidCardStateError
from revisit.fsrs.constants import (
    D_MAX,
    D_MIN,
    DEFAULT_PARAMETERS,
    PRECISION,
    S_MIN,
    ModelParameters,
    Rating,
    State,
)


@dataclass(frozen=True)
class CardState:
    """
    Scheduling state for a single card (one per user and problem).

    Instances are immutable: the scheduler returns a new state instead of
    modifying the one it was given.
    """
    due: datetime
    stability: float = 0.0
    difficulty: float = 0.0
    elapsed_days: int = 0
    scheduled_days: int = 0
    learning_steps: int = 0
    reps: int = 0
    lapses: int = 0
    state: State = State.NEW
    last_review: Optional[datetime] = None


@dataclass(frozen=True)
class ReviewLogEntry:
    """
    Immutable record of one review event.

    State, due, stability and difficulty are the values *after* the review
    was applied. ``last_elapsed_days`` is the elapsed-days value carried by
    the card before this review.
    """
    rating: Rating
    state: State
    due: datetime
    stability: float
    difficulty: float
    elapsed_days: int
    last_elapsed_days: int
    scheduled_days: int
    learning_steps: int
    review: datetime


def create_empty_card(now: datetime) -> CardState:
    """
    Create the state for a freshly added problem.

    The card is immediately due and has no memory parameters yet.
    """
    return CardState(due=ensure_utc(now))


def round_model_value(value: float) -> float:
    """Round a model output so repeated runs produce identical floats."""
    return round(value, PRECISION)


def ensure_utc(value: datetime) -> datetime:
    """
    Normalize a timestamp to UTC.

    Naive values are rejected: their meaning depends on the machine the
    code happens to run on.
    """
    if value.tzinfo is None:
        raise InvalidCardStateError(f"Timestamp {value.isoformat()} has no timezone")
    return value.astimezone(timezone.utc)


def calculate_retrievability(
    stability: float,
    elapsed_days: float,
    params: ModelParameters = DEFAULT_PARAMETERS
) -> float:
    """
    Calculate retrievability using the FSRS power-law forgetting curve.

    Formula: R = (1 + FACTOR * t / S) ^ DECAY

    Where:
    - t = days since the last review
    - S = stability (in days)
    - DECAY = -w20, FACTOR chosen so that R(S, S) = 0.9

    Args:
        stability: Current stability in days
        elapsed_days: Time since last review in days
        params: Model weights

    Returns:
        Retrievability between 0 and 1
    """
    if elapsed_days <= 0:
        return 1.0

    return round_model_value(
        math.pow(1.0 + params.factor * elapsed_days / stability, params.decay)
    )


def calculate_elapsed_days(
    last_review: Optional[datetime],
    reviewed_at: datetime
) -> int:
    """
    Whole UTC calendar days between the last review and this one.

    Returns 0 for never-reviewed cards and for reviews on the same UTC day.
    """
    if last_review is None:
        return 0

    last_date = ensure_utc(last_review).date()
    current_date = ensure_utc(reviewed_at).date()
    return max(0, (current_date - last_date).days)


def add_days(moment: datetime, days: int) -> datetime:
    return moment + timedelta(days=days)


def validate_card(card: CardState) -> None:
    """
    Reject corrupted memory state before it reaches the formulas.

    Raises:
        InvalidCardStateError: if any counter is negative, a timestamp is
            naive, or a non-new card has out-of-range stability/difficulty
    """
    ensure_utc(card.due)
    if card.last_review is not None:
        ensure_utc(card.last_review)

    for name in ("elapsed_days", "scheduled_days", "reps", "lapses"):
        if getattr(card, name) < 0:
            raise InvalidCardStateError(f"{name} must be >= 0, got {getattr(card, name)}")

    if card.state == State.NEW:
        return

    if not math.isfinite(card.stability) or card.stability < S_MIN:
        raise InvalidCardStateError(
            f"Invalid stability {card.stability} for a card in state {card.state.name}"
        )
    if not math.isfinite(card.difficulty) or not D_MIN <= card.difficulty <= D_MAX:
        raise InvalidCardStateError(
            f"Invalid difficulty {card.difficulty} for a card in state {card.state.name}"
        )
    if card.last_review is None:
        raise InvalidCardStateError(
            f"Card in state {card.state.name} has no last review timestamp"
        )
