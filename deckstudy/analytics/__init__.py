"""
Analytics package exports.
"""

from deckstudy.analytics.constants import PERIOD_LABELS
from deckstudy.analytics.service import (
    build_deck_due_counts,
    build_study_stats,
    build_today_overview,
    load_study_stats,
)
from deckstudy.analytics.types import DeckDueCount, StatsPeriod, StudyStats, TodayOverview

__all__ = [
    "PERIOD_LABELS",
    "build_deck_due_counts",
    "build_study_stats",
    "build_today_overview",
    "load_study_stats",
    "DeckDueCount",
    "StatsPeriod",
    "StudyStats",
    "TodayOverview",
]
