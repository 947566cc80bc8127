"""
Scheduler - FSRS Algorithm Logic

Pure FSRS scheduling and state updates (no database calls, no clock).

Main workflow:
1. Load card state (caller's responsibility)
2. Clamp the review time to the card's due date (caller's responsibility)
3. Compute elapsed days and retrievability
4. Apply the stability/difficulty update for the rating
5. Return the next card state + the review-log entry

This module handles ONLY the algorithm logic.
Database I/O is handled by the database module.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Optional

from revisit.errors import InvalidCardStateError
from revisit.fsrs import ltm_updates, stm_updates
from revisit.fsrs.constants import (
    D_MAX,
    D_MIN,
    DEFAULT_PARAMETERS,
    GRADES,
    MAXIMUM_INTERVAL,
    REQUEST_RETENTION,
    ModelParameters,
    Rating,
    State,
)
from revisit.fsrs.memory_state import (
    CardState,
    ReviewLogEntry,
    add_days,
    calculate_elapsed_days,
    calculate_retrievability,
    ensure_utc,
    validate_card,
)


@dataclass(frozen=True)
class SchedulerConfig:
    """
    Structural switches and model choice for a scheduler instance.

    The defaults disable short-term scheduling: every review is scheduled
    in whole days and new or lapsed cards skip the learning-step ladder.
    """
    enable_short_term: bool = False
    learning_steps: tuple[timedelta, ...] = ()
    relearning_steps: tuple[timedelta, ...] = ()
    request_retention: float = REQUEST_RETENTION
    maximum_interval: int = MAXIMUM_INTERVAL
    parameters: ModelParameters = DEFAULT_PARAMETERS


@dataclass(frozen=True)
class _Memory:
    stability: float
    difficulty: float


class Scheduler:
    """
    Maps (card, rating, review time) to (next card, review-log entry).

    Instances hold only immutable configuration and are safe to share
    across threads.
    """

    def __init__(self, config: Optional[SchedulerConfig] = None):
        self.config = config or SchedulerConfig()
        self._interval_modifier = ltm_updates.interval_modifier(
            self.config.request_retention, self.config.parameters
        )

    def schedule(
        self,
        card: CardState,
        rating: Rating,
        reviewed_at: datetime
    ) -> tuple[CardState, ReviewLogEntry]:
        """
        Apply one review to a card.

        Args:
            card: Current persisted state (state NEW for a never-reviewed card)
            rating: Recall quality, AGAIN..EASY
            reviewed_at: Effective review timestamp, already clamped to
                ``card.due`` by the caller

        Returns:
            Tuple of (next_card, log_entry)

        Raises:
            InvalidCardStateError: if the card state is corrupted
            ValueError: if rating is not one of the four grades
        """
        return self.preview(card, reviewed_at)[Rating(rating)]

    def preview(
        self,
        card: CardState,
        reviewed_at: datetime
    ) -> dict[Rating, tuple[CardState, ReviewLogEntry]]:
        """
        Compute the outcome of every rating without choosing one.

        Intervals of the four outcomes are ordered so that a better rating
        never schedules sooner than a worse one.
        """
        validate_card(card)
        reviewed_at = ensure_utc(reviewed_at)
        if card.last_review is not None and reviewed_at < card.last_review:
            raise InvalidCardStateError(
                f"Review at {reviewed_at.isoformat()} precedes last review "
                f"{card.last_review.isoformat()}"
            )

        if card.state == State.NEW:
            elapsed_days = 0
        else:
            elapsed_days = calculate_elapsed_days(card.last_review, reviewed_at)

        memory = {grade: self._next_memory(card, grade, elapsed_days) for grade in GRADES}
        intervals = ltm_updates.order_intervals({
            grade: ltm_updates.next_interval(
                memory[grade].stability,
                self._interval_modifier,
                self.config.maximum_interval,
            )
            for grade in GRADES
        }, self.config.maximum_interval)

        step_outcomes: dict[Rating, stm_updates.StepOutcome] = {}
        if self.config.enable_short_term:
            step_outcomes = stm_updates.learning_step_outcomes(
                card.state,
                card.learning_steps,
                self.config.learning_steps,
                self.config.relearning_steps,
            )

        return {
            grade: self._build_outcome(
                card,
                grade,
                reviewed_at,
                elapsed_days,
                memory[grade],
                intervals[grade],
                step_outcomes.get(grade),
            )
            for grade in GRADES
        }

    def retrievability(self, card: CardState, now: datetime) -> float:
        """Current recall probability of a card (1.0 for never-reviewed cards)."""
        if card.state == State.NEW or card.last_review is None:
            return 1.0
        elapsed_days = calculate_elapsed_days(card.last_review, now)
        return calculate_retrievability(card.stability, elapsed_days, self.config.parameters)

    def _next_memory(self, card: CardState, rating: Rating, elapsed_days: int) -> _Memory:
        params = self.config.parameters

        if card.state == State.NEW:
            return _Memory(
                stability=ltm_updates.init_stability(rating, params),
                difficulty=ltm_updates.clamp(
                    ltm_updates.init_difficulty(rating, params), D_MIN, D_MAX
                ),
            )

        retrievability = calculate_retrievability(card.stability, elapsed_days, params)

        if self.config.enable_short_term and elapsed_days == 0:
            stability = stm_updates.next_short_term_stability(card.stability, rating, params)
        elif rating == Rating.AGAIN:
            divisor = (
                stm_updates.lapse_floor_divisor(params)
                if self.config.enable_short_term
                else 1.0
            )
            stability = ltm_updates.lapse_stability(
                card.difficulty, card.stability, retrievability, params, divisor
            )
        else:
            stability = ltm_updates.next_recall_stability(
                card.difficulty, card.stability, retrievability, rating, params
            )

        return _Memory(
            stability=stability,
            difficulty=ltm_updates.next_difficulty(card.difficulty, rating, params),
        )

    def _build_outcome(
        self,
        card: CardState,
        rating: Rating,
        reviewed_at: datetime,
        elapsed_days: int,
        memory: _Memory,
        interval_days: int,
        step: Optional[stm_updates.StepOutcome]
    ) -> tuple[CardState, ReviewLogEntry]:
        if step is not None:
            # Still on the learning-step ladder: sub-day interval
            state = State.LEARNING if card.state in (State.NEW, State.LEARNING) else State.RELEARNING
            due = reviewed_at + step.interval
            scheduled_days = 0
            learning_steps = step.next_step
        else:
            if rating == Rating.AGAIN and card.state in (State.REVIEW, State.RELEARNING):
                state = State.RELEARNING
            else:
                state = State.REVIEW
            due = add_days(reviewed_at, interval_days)
            scheduled_days = interval_days
            learning_steps = 0

        next_card = replace(
            card,
            due=due,
            stability=memory.stability,
            difficulty=memory.difficulty,
            elapsed_days=elapsed_days,
            scheduled_days=scheduled_days,
            learning_steps=learning_steps,
            reps=card.reps + 1,
            lapses=card.lapses + 1 if rating == Rating.AGAIN else card.lapses,
            state=state,
            last_review=reviewed_at,
        )

        log = ReviewLogEntry(
            rating=rating,
            state=next_card.state,
            due=next_card.due,
            stability=next_card.stability,
            difficulty=next_card.difficulty,
            elapsed_days=elapsed_days,
            last_elapsed_days=card.elapsed_days,
            scheduled_days=scheduled_days,
            learning_steps=learning_steps,
            review=reviewed_at,
        )

        return next_card, log
