"""
Metric computations over review logs.
"""

from __future__ import annotations

import pandas as pd

from revisit.fsrs.constants import Rating


def build_day_index(logs_df: pd.DataFrame) -> pd.DatetimeIndex:
    """
    Build a dense UTC day index spanning the review range.
    """
    if logs_df.empty:
        return pd.DatetimeIndex([], tz="UTC")
    start = logs_df["day_utc"].min()
    end = logs_df["day_utc"].max()
    return pd.date_range(start=start, end=end, freq="D")


def compute_reviewed_unique(logs_df: pd.DataFrame) -> int:
    """
    Count distinct cards reviewed at least once.
    """
    if logs_df.empty:
        return 0
    return int(logs_df["card_id"].nunique())


def compute_reviews_daily(logs_df: pd.DataFrame, day_index: pd.DatetimeIndex) -> pd.Series:
    """
    Number of reviews per UTC day, zero on days without reviews.
    """
    if logs_df.empty or len(day_index) == 0:
        return pd.Series(dtype="int64")
    counts = logs_df.groupby("day_utc").size()
    return counts.reindex(day_index, fill_value=0).astype("int64")


def compute_reviewed_cumulative(
    logs_df: pd.DataFrame,
    day_index: pd.DatetimeIndex
) -> pd.Series:
    """
    Cumulative distinct cards reviewed, by the day of their first review.
    """
    if logs_df.empty or len(day_index) == 0:
        return pd.Series(dtype="int64")

    first_seen = logs_df.groupby("card_id")["review"].min().dt.floor("D")
    counts = first_seen.value_counts().sort_index()
    return counts.reindex(day_index, fill_value=0).cumsum().astype("int64")


def compute_recall_rate(logs_df: pd.DataFrame) -> float:
    """
    Share of reviews rated anything but Again.

    Returns 0.0 when there are no reviews.
    """
    if logs_df.empty:
        return 0.0
    recalled = (logs_df["rating"] != int(Rating.AGAIN)).sum()
    return float(recalled / len(logs_df))
