import pytest

from revisit import reviews
from revisit.analytics import build_review_summary, replay_card
from revisit.fsrs import Scheduler

USER = "alice"

pytestmark = pytest.mark.usefixtures("db")


def test_replaying_history_reproduces_persisted_card(catalog, clock):
    card_id = reviews.add_problem(
        USER, "https://leetcode.com/problems/word-ladder/", catalog, clock=clock
    ).card_id

    for rating, wait_days in [(3, 0), (3, 4), (1, 9), (2, 1), (4, 3)]:
        clock.advance(days=wait_days)
        reviews.submit_review(USER, card_id, rating, clock=clock)

    created_at = reviews.get_review_card(USER, card_id).created_at
    history = reviews.get_review_history(USER, card_id)
    replayed = replay_card(history, created_at, Scheduler())

    assert replayed == reviews.get_card_state(USER, card_id)


def test_review_summary(catalog, clock):
    two_sum = reviews.add_problem(
        USER, "https://leetcode.com/problems/two-sum/", catalog, clock=clock
    ).card_id
    lru = reviews.add_problem(
        USER, "https://leetcode.com/problems/lru-cache/", catalog, clock=clock
    ).card_id

    reviews.submit_review(USER, two_sum, 3, clock=clock)
    clock.advance(days=2)
    reviews.submit_review(USER, lru, 1, clock=clock)
    clock.advance(days=1)
    reviews.submit_review(USER, two_sum, 4, clock=clock)

    summary = build_review_summary(USER)

    assert summary.total_reviews == 3
    assert summary.reviewed_unique == 2
    assert summary.recall_rate == pytest.approx(2 / 3)
    assert summary.reviews_daily.tolist() == [1, 0, 1, 1]
    assert summary.reviewed_cumulative_daily.tolist() == [1, 1, 2, 2]


def test_review_summary_without_history(db):
    summary = build_review_summary(USER)
    assert summary.total_reviews == 0
    assert summary.recall_rate == 0.0
