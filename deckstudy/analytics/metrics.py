"""
Metric computations for study statistics.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pandas as pd

from deckstudy.constants import MATURE_INTERVAL, WEEK_DAYS, ResponseType


def compute_learned_cards(logs_df: pd.DataFrame) -> int:
    """
    Count unique studied card ids.
    """
    if logs_df.empty:
        return 0
    return int(logs_df["card_id"].nunique())


def compute_completed_cards(logs_df: pd.DataFrame, now: datetime) -> int:
    """
    Cards whose latest answer pushed the next review at least 30 days out.
    """
    if logs_df.empty:
        return 0
    latest = logs_df.groupby("card_id", sort=False).tail(1)
    threshold = pd.Timestamp(now + MATURE_INTERVAL)
    return int((latest["next_review_date"] >= threshold).sum())


def compute_response_counts(logs_df: pd.DataFrame) -> dict[ResponseType, int]:
    """
    Number of answers per response type (every type present, zero if unused).
    """
    counts = {response_type: 0 for response_type in ResponseType}
    if logs_df.empty:
        return counts
    for response_type, count in logs_df["response_type"].value_counts().items():
        counts[ResponseType(response_type)] = int(count)
    return counts


def compute_unique_cards_on(logs_df: pd.DataFrame, day: date) -> int:
    if logs_df.empty:
        return 0
    return int(logs_df.loc[logs_df["local_day"] == day, "card_id"].nunique())


def compute_daily_unique(logs_df: pd.DataFrame, today: date, days: int = WEEK_DAYS) -> list[int]:
    """
    Distinct cards studied per day over the last `days` days, oldest first.
    """
    day_index = [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
    if logs_df.empty:
        return [0] * days
    per_day = logs_df.groupby("local_day")["card_id"].nunique()
    return [int(per_day.get(day, 0)) for day in day_index]


def compute_streak_days(logs_df: pd.DataFrame, today: date) -> int:
    """
    Consecutive days with at least one answer, ending today.

    Nothing studied today means no streak.
    """
    if logs_df.empty:
        return 0
    studied_days = set(logs_df["local_day"])
    streak = 0
    day = today
    while day in studied_days:
        streak += 1
        day -= timedelta(days=1)
    return streak
