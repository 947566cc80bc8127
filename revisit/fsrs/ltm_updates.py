"""
Long-Term Memory (LTM) Updates

Implements the FSRS stability, difficulty and interval formulas used for
day-granularity scheduling.

Key principles:
- Growth in stability shrinks as stability, difficulty and retrievability rise
- A lapse recomputes stability from a separate post-lapse curve
- Difficulty moves linearly toward its bounds and reverts toward the Easy seed
"""

from __future__ import annotations

import math

from revisit.fsrs.constants import (
    D_MAX,
    D_MIN,
    DEFAULT_PARAMETERS,
    INIT_S_MAX,
    MAXIMUM_INTERVAL,
    REQUEST_RETENTION,
    S_MAX,
    S_MIN,
    ModelParameters,
    Rating,
)
from revisit.fsrs.memory_state import round_model_value


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def init_stability(
    rating: Rating,
    params: ModelParameters = DEFAULT_PARAMETERS
) -> float:
    """
    Initial stability after the first review: S0(g) = w[g-1].

    Higher ratings seed a higher stability.
    """
    return max(params.weights[int(rating) - 1], INIT_S_MAX)


def init_difficulty(
    rating: Rating,
    params: ModelParameters = DEFAULT_PARAMETERS
) -> float:
    """
    Initial difficulty after the first review.

    Formula:
        D0(g) = w4 - exp((g - 1) * w5) + 1

    Not clamped here: the Easy seed is also the mean-reversion target,
    where the raw value is used.
    """
    w = params.weights
    return round_model_value(w[4] - math.exp((int(rating) - 1) * w[5]) + 1.0)


def linear_damping(delta_d: float, difficulty: float) -> float:
    """Scale a difficulty step so it vanishes as D approaches the maximum."""
    return round_model_value(delta_d * (D_MAX - difficulty) / 9.0)


def mean_reversion(
    initial: float,
    current: float,
    params: ModelParameters = DEFAULT_PARAMETERS
) -> float:
    w7 = params.weights[7]
    return round_model_value(w7 * initial + (1.0 - w7) * current)


def next_difficulty(
    difficulty: float,
    rating: Rating,
    params: ModelParameters = DEFAULT_PARAMETERS
) -> float:
    """
    Update difficulty based on the review outcome.

    Formula:
        delta = -w6 * (g - 3)
        D' = D + delta * (10 - D) / 9
        D'' = clip(w7 * D0(Easy) + (1 - w7) * D', 1, 10)

    Again raises difficulty, Easy lowers it, Good leaves it nearly unchanged.
    """
    delta_d = -params.weights[6] * (int(rating) - 3)
    damped = difficulty + linear_damping(delta_d, difficulty)
    reverted = mean_reversion(init_difficulty(Rating.EASY, params), damped, params)
    return clamp(reverted, D_MIN, D_MAX)


def next_recall_stability(
    difficulty: float,
    stability: float,
    retrievability: float,
    rating: Rating,
    params: ModelParameters = DEFAULT_PARAMETERS
) -> float:
    """
    Update stability after a successful recall (Hard/Good/Easy).

    Formula:
        S' = S * (1 + e^w8 * (11 - D) * S^-w9 * (e^((1 - R) * w10) - 1) * penalty * bonus)

    Where:
        - (11 - D) shrinks growth for difficult problems
        - S^-w9 shrinks growth for already-stable problems
        - (e^((1-R)w10) - 1) rewards well-spaced, riskier recalls
        - penalty = w15 for Hard, bonus = w16 for Easy
    """
    if rating == Rating.AGAIN:
        raise ValueError("Use next_forget_stability for AGAIN ratings")

    w = params.weights
    hard_penalty = w[15] if rating == Rating.HARD else 1.0
    easy_bonus = w[16] if rating == Rating.EASY else 1.0

    growth = (
        math.exp(w[8])
        * (11.0 - difficulty)
        * math.pow(stability, -w[9])
        * (math.exp((1.0 - retrievability) * w[10]) - 1.0)
        * hard_penalty
        * easy_bonus
    )
    return round_model_value(clamp(stability * (1.0 + growth), S_MIN, S_MAX))


def next_forget_stability(
    difficulty: float,
    stability: float,
    retrievability: float,
    params: ModelParameters = DEFAULT_PARAMETERS
) -> float:
    """
    Post-lapse stability after an Again rating.

    Formula:
        S_f = w11 * D^-w12 * ((S + 1)^w13 - 1) * e^((1 - R) * w14)
    """
    w = params.weights
    value = (
        w[11]
        * math.pow(difficulty, -w[12])
        * (math.pow(stability + 1.0, w[13]) - 1.0)
        * math.exp((1.0 - retrievability) * w[14])
    )
    return round_model_value(clamp(value, S_MIN, S_MAX))


def lapse_stability(
    difficulty: float,
    stability: float,
    retrievability: float,
    params: ModelParameters = DEFAULT_PARAMETERS,
    short_term_floor_divisor: float = 1.0
) -> float:
    """
    Stability after a lapse: the post-lapse value, never above the old one.

    With short-term scheduling enabled the lower bound is reduced by
    ``exp(w17 * w18)``; otherwise it equals the current stability.
    """
    floor = round_model_value(stability / short_term_floor_divisor)
    return clamp(floor, S_MIN, next_forget_stability(difficulty, stability, retrievability, params))


def interval_modifier(
    request_retention: float = REQUEST_RETENTION,
    params: ModelParameters = DEFAULT_PARAMETERS
) -> float:
    """
    Factor converting stability into the interval that hits the target retention.

    Inverts the forgetting curve: t = S / FACTOR * (r^(1/DECAY) - 1).
    """
    if not 0.0 < request_retention <= 1.0:
        raise ValueError(f"request_retention must be in (0, 1], got {request_retention}")
    return round_model_value(
        (math.pow(request_retention, 1.0 / params.decay) - 1.0) / params.factor
    )


def next_interval(
    stability: float,
    modifier: float,
    maximum_interval: int = MAXIMUM_INTERVAL
) -> int:
    """
    Interval in whole days for a given stability.

    Always at least one day and never beyond ``maximum_interval``.
    Halves round up.
    """
    days = math.floor(stability * modifier + 0.5)
    return int(min(max(1, days), maximum_interval))


def order_intervals(
    intervals: dict[Rating, int],
    maximum_interval: int = MAXIMUM_INTERVAL
) -> dict[Rating, int]:
    """
    Enforce again <= hard < good < easy across the four candidate intervals.

    The cap still applies afterwards, so intervals at the maximum may tie.
    """
    again = min(intervals[Rating.AGAIN], intervals[Rating.HARD])
    hard = max(intervals[Rating.HARD], again + 1)
    good = max(intervals[Rating.GOOD], hard + 1)
    easy = max(intervals[Rating.EASY], good + 1)
    ordered = {Rating.AGAIN: again, Rating.HARD: hard, Rating.GOOD: good, Rating.EASY: easy}
    return {grade: min(days, maximum_interval) for grade, days in ordered.items()}
