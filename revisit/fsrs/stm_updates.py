"""
Short-Term Memory (STM) Updates

Sub-day scheduling used only when short-term scheduling is enabled:
- Same-day stability updates for cards reviewed again before a day passes
- The learning-step ladder for new and lapsed cards

With short-term scheduling disabled (the default) nothing in this module
runs and every card moves straight to day-granularity review scheduling.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Sequence

from revisit.fsrs.constants import (
    DEFAULT_PARAMETERS,
    S_MAX,
    S_MIN,
    ModelParameters,
    Rating,
    State,
)
from revisit.fsrs.ltm_updates import clamp
from revisit.fsrs.memory_state import round_model_value


@dataclass(frozen=True)
class StepOutcome:
    """Where a rating places a card on the learning-step ladder."""
    interval: timedelta
    next_step: int


def next_short_term_stability(
    stability: float,
    rating: Rating,
    params: ModelParameters = DEFAULT_PARAMETERS
) -> float:
    """
    Stability after a same-day review.

    Formula:
        SInc = S^-w19 * e^(w17 * (g - 3 + w18))
        S' = S * SInc, with SInc >= 1 for Good and Easy
    """
    w = params.weights
    sinc = math.pow(stability, -w[19]) * math.exp(w[17] * (int(rating) - 3 + w[18]))
    if rating >= Rating.GOOD:
        sinc = max(sinc, 1.0)
    return round_model_value(clamp(stability * sinc, S_MIN, S_MAX))


def lapse_floor_divisor(params: ModelParameters = DEFAULT_PARAMETERS) -> float:
    """Divisor applied to the lower stability bound on a short-term lapse."""
    w = params.weights
    return math.exp(w[17] * w[18])


def learning_step_outcomes(
    state: State,
    current_step: int,
    learning_steps: Sequence[timedelta],
    relearning_steps: Sequence[timedelta]
) -> dict[Rating, StepOutcome]:
    """
    Ratings that keep a card on the learning-step ladder.

    Ratings absent from the result graduate the card to Review.

    Rules:
    - Review cards use the relearning ladder and only Again enters it
    - Again restarts the ladder at step 0
    - Hard repeats the current step (average of the first two steps)
    - Good advances to the next step, or graduates past the last one
    - Easy always graduates
    """
    steps = relearning_steps if state in (State.REVIEW, State.RELEARNING) else learning_steps
    if not steps or current_step >= len(steps):
        return {}

    step_at = _step_lookup(steps)
    outcomes: dict[Rating, StepOutcome] = {}

    if state == State.REVIEW:
        outcomes[Rating.AGAIN] = StepOutcome(step_at(max(0, current_step)), 0)
        return outcomes

    outcomes[Rating.AGAIN] = StepOutcome(steps[0], 0)

    if len(steps) == 1:
        hard_interval = steps[0] * 1.5
    else:
        hard_interval = (steps[0] + steps[1]) / 2
    outcomes[Rating.HARD] = StepOutcome(_round_to_minute(hard_interval), current_step)

    next_interval = step_at(current_step + 1)
    if next_interval is not None:
        outcomes[Rating.GOOD] = StepOutcome(next_interval, current_step + 1)

    return outcomes


def _step_lookup(steps: Sequence[timedelta]):
    def step_at(index: int) -> Optional[timedelta]:
        if index < 0 or index >= len(steps):
            return None
        return steps[index]
    return step_at


def _round_to_minute(value: timedelta) -> timedelta:
    minutes = math.floor(value.total_seconds() / 60.0 + 0.5)
    return timedelta(minutes=minutes)
