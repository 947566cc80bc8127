from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from revisit.selector import due_window, end_of_day, is_due, select_due, start_of_day

NOW = datetime(2026, 3, 10, 15, 0, tzinfo=timezone.utc)
MIDNIGHT = datetime(2026, 3, 10, tzinfo=timezone.utc)


@dataclass
class Summary:
    name: str
    due: datetime
    last_review: Optional[datetime] = None


def test_day_bounds_are_utc():
    assert start_of_day(NOW) == MIDNIGHT
    assert end_of_day(NOW) == datetime(2026, 3, 10, 23, 59, 59, 999999, tzinfo=timezone.utc)
    assert due_window(NOW) == (start_of_day(NOW), end_of_day(NOW))


def test_day_bounds_follow_utc_not_local_offset():
    eastern = timezone(timedelta(hours=-5))
    # 21:00 on the 10th at UTC-5 is already the 11th in UTC
    local_now = datetime(2026, 3, 10, 21, 0, tzinfo=eastern)
    assert start_of_day(local_now) == datetime(2026, 3, 11, tzinfo=timezone.utc)


def test_card_due_later_today_is_included():
    card = Summary("evening", due=MIDNIGHT + timedelta(hours=22))
    assert is_due(card, NOW)


def test_end_of_day_boundary():
    on_edge = Summary("edge", due=end_of_day(NOW))
    past_edge = Summary("tomorrow", due=end_of_day(NOW) + timedelta(seconds=1))
    assert is_due(on_edge, NOW)
    assert not is_due(past_edge, NOW)


def test_card_reviewed_today_is_excluded():
    card = Summary(
        "again-today",
        due=NOW - timedelta(hours=1),
        last_review=MIDNIGHT + timedelta(hours=9),
    )
    assert not is_due(card, NOW)


def test_card_reviewed_just_before_midnight_is_included():
    card = Summary(
        "yesterday",
        due=MIDNIGHT + timedelta(hours=8),
        last_review=MIDNIGHT - timedelta(microseconds=1),
    )
    assert is_due(card, NOW)


def test_never_reviewed_overdue_card_is_included():
    assert is_due(Summary("new", due=NOW - timedelta(days=30)), NOW)


def test_select_due_orders_by_due_and_filters():
    cards = [
        Summary("late", due=MIDNIGHT + timedelta(hours=20)),
        Summary("future", due=NOW + timedelta(days=2)),
        Summary("oldest", due=NOW - timedelta(days=4), last_review=NOW - timedelta(days=9)),
        Summary("reviewed", due=NOW - timedelta(days=1), last_review=NOW - timedelta(hours=2)),
        Summary("middle", due=NOW - timedelta(hours=3)),
    ]
    assert [card.name for card in select_due(cards, NOW)] == ["oldest", "middle", "late"]


def test_select_due_ties_keep_input_order():
    same_due = NOW - timedelta(hours=1)
    cards = [Summary(name, due=same_due) for name in ("b", "a", "c")]
    assert [card.name for card in select_due(cards, NOW)] == ["b", "a", "c"]


def test_select_due_handles_empty_input():
    assert select_due([], NOW) == []


def test_select_due_is_recomputed_per_call():
    card = Summary("tomorrow", due=MIDNIGHT + timedelta(days=1, hours=6))
    assert select_due([card], NOW) == []
    assert select_due([card], NOW + timedelta(days=1)) == [card]
