"""
SQLAlchemy ORM Models for the review database

Defines Problem, Card and ReviewLog models. Works against Postgres in
production and SQLite in tests.
"""

from sqlalchemy import (
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class Problem(Base):
    """
    A catalog problem linked by one user.

    Title, difficulty and tags are captured once from the catalog when the
    problem is added and are never revalidated.
    """
    __tablename__ = 'problems'

    id = Column(Integer, primary_key=True, autoincrement=True)  # Insertion order
    user_id = Column(String(255), nullable=False, index=True)

    slug = Column(String(255), nullable=False)
    title = Column(String(512), nullable=False)
    difficulty = Column(String(16), nullable=False)  # "Easy", "Medium", "Hard"
    tags = Column(Text, nullable=False)  # JSON-encoded list of tag names
    url = Column(String(1024), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)

    card = relationship(
        "Card",
        back_populates="problem",
        uselist=False,
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        UniqueConstraint('user_id', 'slug', name='problems_user_slug_unique'),
    )

    def __repr__(self):
        return f"<Problem({self.id}, {self.user_id}, {self.slug})>"


class Card(Base):
    """
    Persistent FSRS scheduling state for one problem.

    ``version`` is an optimistic-concurrency counter: every UPDATE is
    guarded by the version that was loaded, so two transactions that read
    the same state cannot both commit.
    """
    __tablename__ = 'cards'

    id = Column(String(32), primary_key=True)
    user_id = Column(String(255), nullable=False)
    problem_id = Column(
        Integer,
        ForeignKey('problems.id', ondelete='CASCADE'),
        nullable=False,
        unique=True,
    )

    # Scheduling
    due = Column(DateTime(timezone=True), nullable=False)
    stability = Column(Float, nullable=False)
    difficulty = Column(Float, nullable=False)
    elapsed_days = Column(Integer, nullable=False)
    scheduled_days = Column(Integer, nullable=False)
    learning_steps = Column(Integer, nullable=False)

    # Counters and lifecycle
    reps = Column(Integer, nullable=False)
    lapses = Column(Integer, nullable=False)
    state = Column(Integer, nullable=False)  # 0=NEW, 1=LEARNING, 2=REVIEW, 3=RELEARNING
    last_review = Column(DateTime(timezone=True), nullable=True)

    version = Column(Integer, nullable=False)

    problem = relationship("Problem", back_populates="card")
    review_logs = relationship(
        "ReviewLog",
        back_populates="card",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index('cards_user_due_idx', 'user_id', 'due'),
    )
    __mapper_args__ = {'version_id_col': version}

    def __repr__(self):
        return f"<Card({self.id}, problem={self.problem_id}, state={self.state})>"


class ReviewLog(Base):
    """
    Append-only log entry for a single review.

    Captures the rating and the card's state after the review was applied.
    """
    __tablename__ = 'review_logs'

    id = Column(String(32), primary_key=True)
    card_id = Column(String(32), ForeignKey('cards.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(String(255), nullable=False)

    rating = Column(Integer, nullable=False)  # 1=AGAIN, 2=HARD, 3=GOOD, 4=EASY
    state = Column(Integer, nullable=False)

    # State after review
    due = Column(DateTime(timezone=True), nullable=False)
    stability = Column(Float, nullable=False)
    difficulty = Column(Float, nullable=False)

    # Timing
    elapsed_days = Column(Integer, nullable=False)
    last_elapsed_days = Column(Integer, nullable=False)
    scheduled_days = Column(Integer, nullable=False)
    learning_steps = Column(Integer, nullable=False)
    review = Column(DateTime(timezone=True), nullable=False)

    card = relationship("Card", back_populates="review_logs")

    __table_args__ = (
        Index('review_logs_card_id_idx', 'card_id'),
        Index('review_logs_user_review_idx', 'user_id', 'review'),
    )

    def __repr__(self):
        return f"<ReviewLog(id={self.id}, card={self.card_id}, rating={self.rating})>"
