"""
Scheduling Constants and Parameters

All tunable values for the review scheduler in one place.
Durations are timedelta values; multipliers are unitless factors.
"""

from __future__ import annotations

from datetime import timedelta
from enum import Enum


# ---- Response Types ----

class ResponseType(str, Enum):
    """User's answer to a card, ordered worst to best."""
    WRONG = "wrong"      # Forgot completely
    AGAIN = "again"      # Needs another look soon
    HARD = "hard"        # Recalled with difficulty
    CORRECT = "correct"  # Recalled normally
    EASY = "easy"        # Recalled effortlessly

    @property
    def rank(self) -> int:
        return _RANK[self]

    def __lt__(self, other):
        return self.rank < _rank_of(other)

    def __le__(self, other):
        return self.rank <= _rank_of(other)

    def __gt__(self, other):
        return self.rank > _rank_of(other)

    def __ge__(self, other):
        return self.rank >= _rank_of(other)


_RANK = {
    ResponseType.WRONG: 0,
    ResponseType.AGAIN: 1,
    ResponseType.HARD: 2,
    ResponseType.CORRECT: 3,
    ResponseType.EASY: 4,
}


def _rank_of(other) -> int:
    # str mixin would otherwise fall back to lexical ordering
    if not isinstance(other, ResponseType):
        raise TypeError(f"Cannot order ResponseType against {type(other).__name__}")
    return other.rank


# Responses that extend a correct streak
STREAK_RESPONSES = frozenset({ResponseType.CORRECT, ResponseType.EASY})


# ---- Default Review Intervals ----
# Base interval used on first exposure and as the floor afterwards

DEFAULT_INTERVALS = {
    ResponseType.WRONG: timedelta(hours=1),
    ResponseType.AGAIN: timedelta(hours=6),
    ResponseType.HARD: timedelta(days=1),
    ResponseType.CORRECT: timedelta(days=3),
    ResponseType.EASY: timedelta(days=7),
}

# Factor applied to the previous interval

DEFAULT_MULTIPLIERS = {
    ResponseType.WRONG: 1.1,
    ResponseType.AGAIN: 1.2,
    ResponseType.HARD: 1.5,
    ResponseType.CORRECT: 2.0,
    ResponseType.EASY: 2.5,
}


# ---- Interval Adjustments ----

MAX_INTERVAL = timedelta(days=180)       # Hard ceiling (about 6 months)
EARLY_REVIEW_FACTOR = 0.9                # Answered before it was due
LATE_REVIEW_FACTOR = 0.7                 # Answered long after it was due
LATE_REVIEW_GRACE = timedelta(days=7)    # How overdue before the late penalty kicks in
STREAK_BONUS_PER_CORRECT = 0.1           # Per consecutive CORRECT/EASY answer


# ---- Success Rate ----
# Ease on a 0-5 scale, converted to a 0-100 score

EASE_VALUES = {
    ResponseType.WRONG: 0,
    ResponseType.AGAIN: 1,
    ResponseType.HARD: 2,
    ResponseType.CORRECT: 3,
    ResponseType.EASY: 5,
}
MAX_EASE = 5

SLOW_RESPONSE_MS = 10_000
SLOW_RESPONSE_FACTOR = 0.9
VERY_SLOW_RESPONSE_MS = 20_000
VERY_SLOW_RESPONSE_FACTOR = 0.7


# ---- Daily Limits ----

DEFAULT_NEW_CARDS_PER_DAY = 20
DEFAULT_REVIEW_CARDS_PER_DAY = 100


# ---- Statistics ----

MATURE_INTERVAL = timedelta(days=30)  # Next review this far out counts as "completed"
WEEK_DAYS = 7
