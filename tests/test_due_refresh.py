from datetime import datetime, timedelta, timezone

import pytest

from revisit.due_refresh import (
    FIVE_MINUTES,
    THIRTY_MINUTES,
    THIRTY_SECONDS,
    get_due_refresh_interval,
    get_next_due_refresh,
)

NOW = datetime(2026, 3, 10, 15, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("offset, expected", [
    (timedelta(minutes=10), THIRTY_SECONDS),
    (timedelta(minutes=-59), THIRTY_SECONDS),
    (timedelta(hours=1), FIVE_MINUTES),
    (timedelta(hours=23), FIVE_MINUTES),
    (timedelta(days=1), THIRTY_MINUTES),
    (timedelta(days=-3), THIRTY_MINUTES),
])
def test_interval_by_distance_to_due(offset, expected):
    assert get_due_refresh_interval(NOW + offset, NOW) == expected


def test_next_refresh_defaults_without_cards():
    assert get_next_due_refresh([], NOW) == THIRTY_MINUTES


def test_next_refresh_follows_nearest_card():
    dues = [NOW + timedelta(days=5), NOW + timedelta(hours=4), NOW + timedelta(days=2)]
    assert get_next_due_refresh(dues, NOW) == FIVE_MINUTES

    dues.append(NOW + timedelta(minutes=5))
    assert get_next_due_refresh(dues, NOW) == THIRTY_SECONDS
