"""
Reviews - Main API for Problem and Review Management

This module ties the scheduler and the database together and provides the
operations callers use.

Main workflow for a review:
1. Validate the submitted rating
2. Load the owner's card inside a transaction
3. Clamp the review time to the card's due date
4. Schedule the card
5. Save the next state and append the review log in the same transaction
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError

from revisit.catalog import ProblemCatalog
from revisit.errors import ConcurrentModificationError
from revisit.fsrs import database
from revisit.fsrs.memory_state import CardState, ReviewLogEntry
from revisit.fsrs.scheduler import Scheduler
from revisit.schemas import (
    AddProblemRequest,
    AddProblemResult,
    DueCard,
    ProblemCard,
    ReviewSubmission,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

DEFAULT_SCHEDULER = Scheduler()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def effective_review_time(now: datetime, due: datetime) -> datetime:
    """
    Time a review is scored at: never earlier than the card's due date.

    Reviews done ahead of schedule are scored as of the due date.
    """
    return max(now, due)


# ---- Problems ----

def add_problem(
    user_id: str,
    url: str,
    catalog: ProblemCatalog,
    clock: Clock = utc_now
) -> AddProblemResult:
    """
    Link a catalog problem to the user and create its New card.

    Adding a problem the user already tracks returns the existing card.

    Args:
        user_id: Owner of the new card
        url: Problem URL understood by the catalog
        catalog: Catalog lookup collaborator
        clock: Source of the creation time

    Returns:
        AddProblemResult with the card id and whether it was created
    """
    request = AddProblemRequest(url=url)
    url = str(request.url)
    slug = catalog.slug_for(url)

    with database.session_scope() as session:
        existing = database.find_card_for_slug(session, user_id, slug)
        if existing is not None:
            return AddProblemResult(card_id=existing.id, created=False)

    metadata = catalog.fetch(slug)

    try:
        with database.session_scope() as session:
            card = database.create_problem_with_card(session, user_id, metadata, url, clock())
            card_id = card.id
    except IntegrityError:
        # Lost a race with a concurrent add of the same problem
        with database.session_scope() as session:
            existing = database.find_card_for_slug(session, user_id, metadata.slug)
            if existing is None:
                raise
            return AddProblemResult(card_id=existing.id, created=False)

    logger.info("Added problem %s for user %s (card %s)", metadata.slug, user_id, card_id)
    return AddProblemResult(card_id=card_id, created=True)


def list_problems(user_id: str) -> list[ProblemCard]:
    """All problems the user tracks, newest first."""
    with database.session_scope() as session:
        return database.list_problem_cards(session, user_id)


def get_review_card(user_id: str, card_id: str) -> ProblemCard:
    """
    The problem behind a card, for the review screen.

    Raises:
        CardNotFoundError: if the card does not exist for this user
    """
    with database.session_scope() as session:
        return database.get_problem_card(session, card_id, user_id)


# ---- Reviews ----

def submit_review(
    user_id: str,
    card_id: str,
    rating: int,
    scheduler: Scheduler = DEFAULT_SCHEDULER,
    clock: Clock = utc_now,
    max_attempts: int = 1
) -> tuple[CardState, ReviewLogEntry]:
    """
    Record a review and reschedule the card.

    Load, schedule and save run in one transaction per attempt. When a
    concurrent review of the same card commits first, the attempt is
    rolled back and, if attempts remain, retried against the fresh state.

    Args:
        user_id: Owner of the card
        card_id: Card being reviewed
        rating: Integer grade, 1 (Again) to 4 (Easy)
        scheduler: Scheduler to apply
        clock: Source of the current time
        max_attempts: Transactions to try before giving up

    Returns:
        Tuple of (next_card, log_entry) as persisted

    Raises:
        pydantic.ValidationError: if card_id or rating are invalid
        CardNotFoundError: if the card does not exist for this user
        ConcurrentModificationError: if every attempt lost to a concurrent review
    """
    submission = ReviewSubmission(card_id=card_id, rating=rating)
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

    attempt = 0
    while True:
        attempt += 1
        try:
            with database.session_scope() as session:
                row = database.load_card(session, submission.card_id, user_id)
                card = database.to_card_state(row)
                reviewed_at = effective_review_time(clock(), card.due)
                next_card, log = scheduler.schedule(card, submission.grade, reviewed_at)
                database.save_review(session, row, next_card, log)
        except ConcurrentModificationError:
            if attempt >= max_attempts:
                raise
            logger.warning(
                "Retrying review of card %s after concurrent update (attempt %d/%d)",
                submission.card_id, attempt, max_attempts,
            )
            continue

        logger.debug(
            "Card %s rated %s: state=%s stability=%.4f due=%s",
            submission.card_id, log.rating.name, log.state.name,
            log.stability, log.due.isoformat(),
        )
        return next_card, log


# ---- Convenience functions ----

def get_card_state(user_id: str, card_id: str) -> CardState:
    """
    Current scheduling state of a card.

    Raises:
        CardNotFoundError: if the card does not exist for this user
    """
    with database.session_scope() as session:
        return database.to_card_state(database.load_card(session, card_id, user_id))


def get_due_cards(user_id: str, clock: Clock = utc_now) -> list[DueCard]:
    """
    Cards to review today, soonest due first.

    Cards already reviewed earlier today are left out.
    """
    with database.session_scope() as session:
        return database.query_due_cards(session, user_id, clock())


def get_review_history(user_id: str, card_id: Optional[str] = None) -> list[dict]:
    """Review logs for a user (optionally one card), oldest first."""
    with database.session_scope() as session:
        return database.get_review_logs(session, user_id, card_id)
