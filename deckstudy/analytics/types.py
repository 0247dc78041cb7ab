"""
Types for study statistics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from deckstudy.constants import ResponseType


StatsPeriod = Literal["week", "month", "all"]


@dataclass(frozen=True)
class StudyStats:
    """
    Overall progress figures for the stats screen.
    """
    period: StatsPeriod
    total_cards: int
    learned_cards: int          # Cards studied at least once
    reviewed_count: int         # Answers recorded within the period
    completed_cards: int        # Latest answer schedules the card 30+ days out
    streak_days: int            # Consecutive days studied, ending today
    today_learned: int          # Distinct cards answered today
    response_counts: dict[ResponseType, int]
    weekly_learning: list[int]  # Distinct cards per day, oldest of 7 days first


@dataclass(frozen=True)
class TodayOverview:
    total_cards: int
    completed_today: int
    due: int

    @property
    def completion_ratio(self) -> float:
        planned = self.completed_today + self.due
        return self.completed_today / planned if planned else 0.0


@dataclass(frozen=True)
class DeckDueCount:
    total: int
    due: int
