"""
Data-loading helpers for analytics.
"""

from __future__ import annotations

from typing import Optional

import pandas as pd

from revisit import reviews

LOG_COLUMNS = ["card_id", "rating", "state", "review", "day_utc"]


def review_logs_to_df(rows: list[dict]) -> pd.DataFrame:
    """
    Turn review-log dicts into a dataframe sorted by review time.

    Adds a ``day_utc`` column with the UTC calendar day of each review.
    """
    if not rows:
        return pd.DataFrame(columns=LOG_COLUMNS)

    df = pd.DataFrame(rows)
    df = df[["card_id", "rating", "state", "review"]].copy()
    df["rating"] = df["rating"].astype("int64")
    df["state"] = df["state"].astype("int64")
    df["review"] = pd.to_datetime(df["review"], utc=True)
    df["day_utc"] = df["review"].dt.floor("D")
    return df.sort_values("review").reset_index(drop=True)


def load_review_logs_df(user_id: str, card_id: Optional[str] = None) -> pd.DataFrame:
    """
    Load a user's review logs (optionally for one card) into a dataframe.
    """
    return review_logs_to_df(reviews.get_review_history(user_id, card_id))
