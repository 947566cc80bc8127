"""
Types for review-history analytics.
"""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd


@dataclass(frozen=True)
class ReviewSummary:
    """
    Precomputed metrics and series over one user's review history.
    """
    total_reviews: int
    reviewed_unique: int
    recall_rate: float
    reviews_daily: pd.Series
    reviewed_cumulative_daily: pd.Series
