"""
FSRS - Free Spaced Repetition Scheduler

Review-scheduling engine for tracked interview problems.

This package implements the FSRS-6 memory model with:
- Power-law forgetting curve: R = (1 + FACTOR * t / S) ^ DECAY
- Stability growth on recall and a post-lapse stability on failure
- Difficulty updates with linear damping and mean reversion
- Optional sub-day learning steps (disabled by default)

Quick start:
    from revisit import fsrs

    scheduler = fsrs.Scheduler()
    card = fsrs.create_empty_card(now)

    # Process a review (algorithm only, no DB calls)
    next_card, log = scheduler.schedule(card, fsrs.Rating.GOOD, now)

Database I/O lives in ``revisit.fsrs.database`` and is imported explicitly.
"""

# Core scheduler API (algorithm logic)
from revisit.fsrs.scheduler import Scheduler, SchedulerConfig

# Constants and parameters
from revisit.fsrs.constants import (
    Rating,
    State,
    ModelParameters,
    DEFAULT_PARAMETERS,
    REQUEST_RETENTION,
    MAXIMUM_INTERVAL,
    S_MIN,
    D_MIN,
    D_MAX,
)

# Memory state
from revisit.fsrs.memory_state import (
    CardState,
    ReviewLogEntry,
    create_empty_card,
    calculate_retrievability,
    calculate_elapsed_days,
)


__all__ = [
    # Core algorithm
    "Scheduler",
    "SchedulerConfig",

    # Enums
    "Rating",
    "State",

    # Memory state
    "CardState",
    "ReviewLogEntry",
    "create_empty_card",
    "calculate_retrievability",
    "calculate_elapsed_days",

    # Parameters
    "ModelParameters",
    "DEFAULT_PARAMETERS",
    "REQUEST_RETENTION",
    "MAXIMUM_INTERVAL",
    "S_MIN",
    "D_MIN",
    "D_MAX",
]
