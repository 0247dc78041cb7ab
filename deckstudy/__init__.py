"""
deckstudy - Flashcard Review Scheduler

Main API for the flashcard study engine.

This package implements a log-derived spaced repetition scheduler:
- Interval calculation from a card's immutable answer history
- Daily selection of new and review cards under per-day caps
- Study sessions that persist one log per answer

Quick start:
    from deckstudy import SqlRecordStore, StudySession, ResponseType

    store = SqlRecordStore("sqlite:///logs/deckstudy.db")
    session = StudySession(store)
    session.start(deck_id)

    while session.current_card is not None:
        session.respond(ResponseType.CORRECT, response_time_ms=4200)
"""

# Scheduling algorithm (pure functions)
from deckstudy.scheduling import (
    adjusted_multiplier,
    calculate_interval,
    calculate_next_review_date,
    calculate_success_rate,
    consecutive_correct,
)
from deckstudy.selection import TodayCards, due_card_ids, is_due, select_today_cards, today_window

# Session orchestration
from deckstudy.session import Progress, SessionStats, SessionStatus, StudySession

# Persistence
from deckstudy.store import RecordStore, SqlRecordStore

# Data model
from deckstudy.schemas import Card, Deck, Meaning, ReviewIntervals, StudyLog, UserSettings
from deckstudy.constants import (
    DEFAULT_INTERVALS,
    DEFAULT_MULTIPLIERS,
    MAX_INTERVAL,
    ResponseType,
)
from deckstudy.exceptions import DeckNotFoundError, DeckStudyError, PersistenceError


__all__ = [
    # Core algorithm
    "adjusted_multiplier",
    "calculate_interval",
    "calculate_next_review_date",
    "calculate_success_rate",
    "consecutive_correct",
    "select_today_cards",
    "due_card_ids",
    "is_due",
    "today_window",
    "TodayCards",

    # Sessions
    "StudySession",
    "SessionStatus",
    "SessionStats",
    "Progress",

    # Persistence
    "RecordStore",
    "SqlRecordStore",

    # Data model
    "Card",
    "Deck",
    "Meaning",
    "StudyLog",
    "ReviewIntervals",
    "UserSettings",
    "ResponseType",

    # Parameters
    "DEFAULT_INTERVALS",
    "DEFAULT_MULTIPLIERS",
    "MAX_INTERVAL",

    # Errors
    "DeckStudyError",
    "DeckNotFoundError",
    "PersistenceError",
]
