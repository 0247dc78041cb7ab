"""
Pydantic models for cards, decks, study logs and user settings.

These models are the values exchanged between the record store and the
scheduling engine. Study logs are frozen: once recorded they never change.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from deckstudy.constants import (
    DEFAULT_NEW_CARDS_PER_DAY,
    DEFAULT_REVIEW_CARDS_PER_DAY,
    ResponseType,
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_aware(value: Optional[datetime]) -> datetime:
    """
    Reference instant as an aware datetime.

    None means now (UTC). Naive values are taken as local time.
    """
    if value is None:
        return utc_now()
    if value.tzinfo is None:
        return value.astimezone()
    return value


# ---- Cards and Decks ----

class Example(BaseModel):
    """An example sentence with optional translation."""
    text: str
    translation: Optional[str] = None


class Meaning(BaseModel):
    """One sense of a word."""
    definition: str
    part_of_speech: Optional[str] = None
    examples: list[Example] = Field(default_factory=list)


class Card(BaseModel):
    """
    A flashcard.

    Cards carry no scheduling state; everything the scheduler needs is
    rebuilt from the card's study logs.
    """
    id: str
    word: str
    phonetic: Optional[str] = None
    etymology: Optional[str] = None
    meanings: list[Meaning] = Field(default_factory=list)
    memorization_tip: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Deck(BaseModel):
    """A named, ordered collection of card ids."""
    id: str
    name: str
    description: Optional[str] = None
    card_ids: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


# ---- Study Logs ----

class StudyLog(BaseModel):
    """
    One recorded answer to a card (append-only, immutable).
    """
    model_config = ConfigDict(frozen=True)

    id: str
    card_id: str
    deck_id: str
    studied_at: datetime
    response_time_ms: int = Field(ge=0)
    response_type: ResponseType
    next_review_date: datetime

    @model_validator(mode="after")
    def _check_interval_positive(self) -> "StudyLog":
        if self.next_review_date <= self.studied_at:
            raise ValueError("next_review_date must be after studied_at")
        return self

    @property
    def interval(self) -> timedelta:
        """Scheduled interval between this answer and the next review."""
        return self.next_review_date - self.studied_at


# ---- Settings ----

class ReviewIntervals(BaseModel):
    """
    Base interval (minutes) and multiplier for each response type.
    """
    wrong: int = Field(default=60, gt=0)          # 1 hour
    again: int = Field(default=360, gt=0)         # 6 hours
    hard: int = Field(default=1440, gt=0)         # 1 day
    correct: int = Field(default=4320, gt=0)      # 3 days
    easy: int = Field(default=10080, gt=0)        # 7 days

    wrong_multiplier: float = Field(default=1.1, ge=0)
    again_multiplier: float = Field(default=1.2, ge=0)
    hard_multiplier: float = Field(default=1.5, ge=0)
    correct_multiplier: float = Field(default=2.0, ge=0)
    easy_multiplier: float = Field(default=2.5, ge=0)

    def base_intervals(self) -> dict[ResponseType, timedelta]:
        return {
            response_type: timedelta(minutes=getattr(self, response_type.value))
            for response_type in ResponseType
        }

    def multipliers(self) -> dict[ResponseType, float]:
        return {
            response_type: getattr(self, f"{response_type.value}_multiplier")
            for response_type in ResponseType
        }


class UserSettings(BaseModel):
    """Learner settings consumed by the scheduler."""
    new_cards_per_day: int = Field(default=DEFAULT_NEW_CARDS_PER_DAY, ge=0)
    review_cards_per_day: int = Field(default=DEFAULT_REVIEW_CARDS_PER_DAY, ge=0)
    review_intervals: ReviewIntervals = Field(default_factory=ReviewIntervals)
