"""
Pydantic models for requests and views at the review service boundary.

Requests are validated here before anything reaches the scheduler;
invalid input raises ``pydantic.ValidationError`` and is never coerced.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, HttpUrl, StrictInt, StrictStr

from revisit.fsrs.constants import Rating, State


class ProblemDifficulty(str, Enum):
    """Catalog difficulty label of a problem."""
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


# ---- Catalog ----

class ProblemMetadata(BaseModel):
    """Problem details resolved from the external catalog."""
    slug: str = Field(..., min_length=1, description="Catalog identifier")
    title: str = Field(..., min_length=1)
    difficulty: ProblemDifficulty
    tags: list[str] = Field(default_factory=list)


# ---- Requests ----

class AddProblemRequest(BaseModel):
    url: HttpUrl


class ReviewSubmission(BaseModel):
    """A self-assessed rating for one card."""
    card_id: StrictStr = Field(..., min_length=1)
    rating: StrictInt = Field(..., ge=1, le=4, description="1=Again, 2=Hard, 3=Good, 4=Easy")

    @property
    def grade(self) -> Rating:
        return Rating(self.rating)


# ---- Views ----

class AddProblemResult(BaseModel):
    card_id: str
    created: bool


class DueCard(BaseModel):
    """A due card joined with its problem's metadata."""
    card_id: str
    due: datetime
    last_review: Optional[datetime] = None
    state: State
    slug: str
    title: str
    difficulty: ProblemDifficulty
    tags: list[str]
    url: str


class ProblemCard(BaseModel):
    """A tracked problem with a summary of its card."""
    card_id: str
    problem_id: int
    slug: str
    title: str
    difficulty: ProblemDifficulty
    tags: list[str]
    url: str
    created_at: datetime
    due: datetime
    state: State
    reps: int
    lapses: int
