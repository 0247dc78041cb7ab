"""
Constants for study statistics.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Final, Optional


PERIOD_WINDOWS: Final[dict[str, Optional[timedelta]]] = {
    "week": timedelta(days=7),
    "month": timedelta(days=30),
    "all": None,
}

PERIOD_LABELS: Final[dict[str, str]] = {
    "week": "Last 7 days",
    "month": "Last 30 days",
    "all": "All time",
}

LOG_COLUMNS: Final[list[str]] = [
    "card_id",
    "deck_id",
    "studied_at",
    "response_type",
    "next_review_date",
    "local_day",
]
