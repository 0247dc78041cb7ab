"""
Service layer to assemble study statistics.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional

import pandas as pd

from deckstudy.analytics.constants import PERIOD_WINDOWS
from deckstudy.analytics.metrics import (
    compute_completed_cards,
    compute_daily_unique,
    compute_learned_cards,
    compute_response_counts,
    compute_streak_days,
    compute_unique_cards_on,
)
from deckstudy.analytics.queries import logs_to_df
from deckstudy.analytics.types import DeckDueCount, StatsPeriod, StudyStats, TodayOverview
from deckstudy.schemas import Card, Deck, StudyLog
from deckstudy.selection import due_card_ids
from deckstudy.store.base import RecordStore


def _local_now(now: Optional[datetime]) -> datetime:
    if now is None:
        now = datetime.now(timezone.utc)
    return now.astimezone()


def build_study_stats(
    cards: Iterable[Card],
    logs: Iterable[StudyLog],
    period: StatsPeriod = "week",
    now: Optional[datetime] = None
) -> StudyStats:
    """
    Build all figures needed by the stats screen.

    learned/completed/streak/today/weekly figures use the full history;
    reviewed_count and response_counts only the selected period.
    """
    if period not in PERIOD_WINDOWS:
        raise ValueError(f"Unknown stats period: {period}")

    local_now = _local_now(now)
    today = local_now.date()
    logs_df = logs_to_df(logs, local_now.tzinfo)

    window = PERIOD_WINDOWS[period]
    if window is None or logs_df.empty:
        period_df = logs_df
    else:
        period_df = logs_df[logs_df["studied_at"] >= pd.Timestamp(local_now - window)]

    return StudyStats(
        period=period,
        total_cards=len(list(cards)),
        learned_cards=compute_learned_cards(logs_df),
        reviewed_count=len(period_df),
        completed_cards=compute_completed_cards(logs_df, local_now),
        streak_days=compute_streak_days(logs_df, today),
        today_learned=compute_unique_cards_on(logs_df, today),
        response_counts=compute_response_counts(period_df),
        weekly_learning=compute_daily_unique(logs_df, today),
    )


def build_today_overview(
    cards: Iterable[Card],
    logs: Iterable[StudyLog],
    now: Optional[datetime] = None
) -> TodayOverview:
    """
    Home-screen progress: cards done today vs cards still waiting.
    """
    local_now = _local_now(now)
    logs = list(logs)
    card_ids = [card.id for card in cards]
    logs_df = logs_to_df(logs, local_now.tzinfo)

    return TodayOverview(
        total_cards=len(card_ids),
        completed_today=compute_unique_cards_on(logs_df, local_now.date()),
        due=len(due_card_ids(logs, card_ids, now=local_now)),
    )


def build_deck_due_counts(
    decks: Iterable[Deck],
    logs: Iterable[StudyLog],
    now: Optional[datetime] = None
) -> dict[str, DeckDueCount]:
    """
    Total and waiting card counts for each deck.
    """
    logs = list(logs)
    return {
        deck.id: DeckDueCount(
            total=len(deck.card_ids),
            due=len(due_card_ids(logs, deck.card_ids, now=now)),
        )
        for deck in decks
    }


def load_study_stats(
    store: RecordStore,
    period: StatsPeriod = "week",
    now: Optional[datetime] = None
) -> StudyStats:
    """Build study stats straight from a record store."""
    return build_study_stats(store.get_all_cards(), store.get_all_logs(), period=period, now=now)
