"""
Service layer to assemble a user's review summary.
"""

from __future__ import annotations

from revisit.analytics.metrics import (
    build_day_index,
    compute_recall_rate,
    compute_reviewed_cumulative,
    compute_reviewed_unique,
    compute_reviews_daily,
)
from revisit.analytics.queries import load_review_logs_df
from revisit.analytics.types import ReviewSummary


def build_review_summary(user_id: str) -> ReviewSummary:
    """
    Build the KPI values and daily series for one user's review history.
    """
    logs_df = load_review_logs_df(user_id)
    day_index = build_day_index(logs_df)

    return ReviewSummary(
        total_reviews=len(logs_df),
        reviewed_unique=compute_reviewed_unique(logs_df),
        recall_rate=compute_recall_rate(logs_df),
        reviews_daily=compute_reviews_daily(logs_df, day_index),
        reviewed_cumulative_daily=compute_reviewed_cumulative(logs_df, day_index),
    )
