"""
FSRS Constants and Parameters

All configurable parameters for the FSRS memory model in one place.
The weight table is versioned: swapping ``DEFAULT_PARAMETERS`` for another
``ModelParameters`` instance changes the numeric model without touching
the scheduler's control flow.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum


# ---- Ratings and States ----

class Rating(IntEnum):
    """Self-assessed recall quality for a review."""
    AGAIN = 1   # Forgot the solution
    HARD = 2    # Solved with significant effort
    GOOD = 3    # Solved normally
    EASY = 4    # Solved fluently


class State(IntEnum):
    """Lifecycle stage of a card."""
    NEW = 0
    LEARNING = 1
    REVIEW = 2
    RELEARNING = 3


GRADES = (Rating.AGAIN, Rating.HARD, Rating.GOOD, Rating.EASY)


# ---- Global Constants ----

S_MIN = 0.001        # Minimum stability (days)
S_MAX = 36500.0      # Maximum stability (days)
INIT_S_MAX = 0.1     # Floor applied to initial stability seeds
D_MIN = 1.0          # Minimum difficulty
D_MAX = 10.0         # Maximum difficulty

REQUEST_RETENTION = 0.9     # Target retrievability used to derive intervals
MAXIMUM_INTERVAL = 36500    # Longest interval the scheduler will assign (days)

PRECISION = 8        # Decimal places kept on every model output


# ---- Model Weights ----

FSRS6_DEFAULT_WEIGHTS = (
    0.212, 1.2931, 2.3065, 8.2956,    # w0-w3: initial stability per rating
    6.4133, 0.8334,                   # w4-w5: initial difficulty
    3.0194, 0.001,                    # w6-w7: difficulty step, mean reversion
    1.8722, 0.1666, 0.796,            # w8-w10: recall stability growth
    1.4835, 0.0614, 0.2629, 1.6483,   # w11-w14: post-lapse stability
    0.6014, 1.8729,                   # w15-w16: hard penalty, easy bonus
    0.5425, 0.0912, 0.0658,           # w17-w19: short-term stability
    0.1542,                           # w20: forgetting-curve decay
)


@dataclass(frozen=True)
class ModelParameters:
    """
    A named, versioned set of FSRS weights.

    Derived constants of the forgetting curve (decay and factor) are
    exposed as properties so every formula reads them from one place.
    """
    version: str
    weights: tuple[float, ...]

    def __post_init__(self):
        if len(self.weights) != 21:
            raise ValueError(
                f"FSRS model {self.version!r} expects 21 weights, got {len(self.weights)}"
            )

    @property
    def decay(self) -> float:
        return -self.weights[20]

    @property
    def factor(self) -> float:
        return math.pow(0.9, 1.0 / self.decay) - 1.0


DEFAULT_PARAMETERS = ModelParameters(version="fsrs-6", weights=FSRS6_DEFAULT_WEIGHTS)
