"""
Data-loading helpers for statistics.
"""

from __future__ import annotations

from datetime import tzinfo
from typing import Iterable

import pandas as pd

from deckstudy.analytics.constants import LOG_COLUMNS
from deckstudy.schemas import StudyLog


def logs_to_df(logs: Iterable[StudyLog], local_tz: tzinfo) -> pd.DataFrame:
    """
    Load study logs into a dataframe sorted by studied_at.

    `local_day` is the calendar date of studied_at in `local_tz`.
    """
    rows = [
        {
            "card_id": log.card_id,
            "deck_id": log.deck_id,
            "studied_at": log.studied_at,
            "response_type": log.response_type,
            "next_review_date": log.next_review_date,
        }
        for log in logs
    ]
    if not rows:
        return pd.DataFrame(columns=LOG_COLUMNS)

    df = pd.DataFrame(rows)
    df["studied_at"] = pd.to_datetime(df["studied_at"], utc=True)
    df["next_review_date"] = pd.to_datetime(df["next_review_date"], utc=True)
    df["local_day"] = df["studied_at"].dt.tz_convert(local_tz).dt.date
    df = df.sort_values("studied_at", kind="stable").reset_index(drop=True)
    return df
