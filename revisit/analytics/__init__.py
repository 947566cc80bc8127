"""
Analytics package exports.
"""

from revisit.analytics.replay import replay_card
from revisit.analytics.service import build_review_summary
from revisit.analytics.types import ReviewSummary

__all__ = [
    "build_review_summary",
    "replay_card",
    "ReviewSummary",
]
