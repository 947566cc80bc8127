from datetime import datetime, timedelta, timezone
from urllib.parse import urlparse

import pytest

from revisit.fsrs import database
from revisit.schemas import ProblemDifficulty, ProblemMetadata


T0 = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Injectable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


class FakeCatalog:
    """In-memory catalog keyed by slug."""

    def __init__(self, problems: dict[str, ProblemMetadata]):
        self.problems = problems
        self.fetched: list[str] = []

    def slug_for(self, url: str) -> str:
        parts = [part for part in urlparse(url).path.split("/") if part]
        if len(parts) < 2 or parts[0] != "problems":
            raise ValueError(f"Not a problem URL: {url}")
        return parts[1]

    def fetch(self, slug: str) -> ProblemMetadata:
        self.fetched.append(slug)
        return self.problems[slug]


@pytest.fixture
def clock():
    return FakeClock(T0)


@pytest.fixture
def catalog():
    return FakeCatalog({
        "two-sum": ProblemMetadata(
            slug="two-sum",
            title="Two Sum",
            difficulty=ProblemDifficulty.EASY,
            tags=["Array", "Hash Table"],
        ),
        "lru-cache": ProblemMetadata(
            slug="lru-cache",
            title="LRU Cache",
            difficulty=ProblemDifficulty.MEDIUM,
            tags=["Design", "Linked List"],
        ),
        "word-ladder": ProblemMetadata(
            slug="word-ladder",
            title="Word Ladder",
            difficulty=ProblemDifficulty.HARD,
            tags=["BFS"],
        ),
        "median-of-two-sorted-arrays": ProblemMetadata(
            slug="median-of-two-sorted-arrays",
            title="Median of Two Sorted Arrays",
            difficulty=ProblemDifficulty.HARD,
            tags=["Binary Search"],
        ),
    })


@pytest.fixture
def db(tmp_path, monkeypatch):
    """Fresh SQLite database per test."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'reviews.sqlite'}")
    monkeypatch.setenv("TEST_MODE", "false")
    database.init_db()
    yield
    database.dispose_engines()
