"""
Study session lifecycle.

A session is one pass over a fixed queue of card ids built at start (or
reset): today's review and new cards, shuffled once. The session presents
one card at a time, records one answer per card and persists it as a study
log before advancing.

State machine: LOADING -> READY -> COMPLETE. reset() goes back to READY
(or COMPLETE when nothing is due).
"""

from __future__ import annotations

import logging
import random
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from deckstudy.constants import ResponseType
from deckstudy.exceptions import DeckNotFoundError, PersistenceError
from deckstudy.scheduling import calculate_next_review_date, calculate_success_rate
from deckstudy.schemas import Card, Deck, StudyLog, UserSettings
from deckstudy.selection import select_today_cards
from deckstudy.store.base import RecordStore

logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    COMPLETE = "complete"


@dataclass
class SessionStats:
    """
    Running counts for the current session.
    """
    counts: dict[ResponseType, int] = field(
        default_factory=lambda: {response_type: 0 for response_type in ResponseType}
    )
    success_rates: list[float] = field(default_factory=list)

    def record(self, response_type: ResponseType, success_rate: float) -> None:
        self.counts[response_type] += 1
        self.success_rates.append(success_rate)

    @property
    def answered(self) -> int:
        return sum(self.counts.values())

    @property
    def accuracy(self) -> Optional[float]:
        """Share of HARD/CORRECT/EASY answers, or None before any answer."""
        if self.answered == 0:
            return None
        recalled = sum(
            count for response_type, count in self.counts.items()
            if response_type >= ResponseType.HARD
        )
        return recalled / self.answered

    @property
    def mean_success_rate(self) -> Optional[float]:
        if not self.success_rates:
            return None
        return sum(self.success_rates) / len(self.success_rates)


@dataclass(frozen=True)
class Progress:
    completed: int
    total: int


class StudySession:
    """
    Drives a single study pass over one deck.

    The caller serializes interactions: one current card, one outstanding
    respond() call at a time.
    """

    def __init__(
        self,
        store: RecordStore,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.store = store
        self._rng = rng or random.Random()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

        self.session_id: Optional[str] = None
        self.status = SessionStatus.LOADING
        self.deck: Optional[Deck] = None
        self.settings: Optional[UserSettings] = None
        self.cards: dict[str, Card] = {}
        self.logs: list[StudyLog] = []
        self.queue: list[Card] = []
        self.position = 0
        self.stats = SessionStats()

    # ---- Read-only state ----

    @property
    def current_card(self) -> Optional[Card]:
        if self.status != SessionStatus.READY or self.position >= len(self.queue):
            return None
        return self.queue[self.position]

    @property
    def is_complete(self) -> bool:
        return self.status == SessionStatus.COMPLETE

    @property
    def progress(self) -> Progress:
        return Progress(completed=self.position, total=len(self.queue))

    # ---- Lifecycle ----

    def start(self, deck_id: str) -> None:
        """
        Load the deck and build today's queue.

        Raises:
            DeckNotFoundError: The deck id is not in the store
        """
        self.status = SessionStatus.LOADING
        self.session_id = None
        self.deck = None
        self.cards = {}
        self.logs = []
        self.queue = []
        self.position = 0
        self.stats = SessionStats()

        deck = self.store.get_deck_by_id(deck_id)
        if deck is None:
            raise DeckNotFoundError(deck_id)

        self.deck = deck
        self.settings = self.store.get_settings()
        deck_card_ids = set(deck.card_ids)
        self.cards = {
            card.id: card for card in self.store.get_all_cards()
            if card.id in deck_card_ids
        }
        self.logs = self.store.get_all_logs()

        self._build_queue()

    def reset(self) -> None:
        """
        Rebuild today's queue from the stored logs and settings.

        Answers from the previous pass are already persisted, so they count.
        """
        if self.deck is None:
            logger.warning("reset() called with no started deck; nothing to reset")
            return

        self.status = SessionStatus.LOADING
        self.settings = self.store.get_settings()
        self.logs = self.store.get_all_logs()
        self._build_queue()

    def _build_queue(self) -> None:
        deck_card_ids = []
        for card_id in self.deck.card_ids:
            if card_id not in self.cards:
                logger.warning("Deck %s references missing card %s; skipped", self.deck.id, card_id)
                continue
            deck_card_ids.append(card_id)
        scope = set(deck_card_ids)
        deck_logs = [log for log in self.logs if log.card_id in scope]

        today = select_today_cards(
            deck_logs,
            self.settings.new_cards_per_day,
            self.settings.review_cards_per_day,
            deck_card_ids,
            now=self._clock()
        )

        queue = [self.cards[card_id] for card_id in today.all_card_ids]

        # Fisher-Yates, once per session
        self._rng.shuffle(queue)

        self.session_id = str(uuid.uuid4())
        self.queue = queue
        self.position = 0
        self.stats = SessionStats()
        self.status = SessionStatus.READY if queue else SessionStatus.COMPLETE

        logger.info(
            "Session %s for deck %s: %d new, %d review",
            self.session_id, self.deck.id,
            len(today.new_card_ids), len(today.review_card_ids)
        )

    # ---- Answers ----

    def respond(self, response_type: ResponseType, response_time_ms: int) -> Optional[StudyLog]:
        """
        Record an answer to the current card and advance.

        Args:
            response_type: The user's answer
            response_time_ms: Time taken to answer in milliseconds

        Returns:
            The persisted StudyLog, or None if there is no current card

        Raises:
            PersistenceError: The store failed to save the log; the session
                stays on the same card
        """
        card = self.current_card
        if card is None:
            logger.warning("respond() called with no current card (status=%s)", self.status.value)
            return None

        response_type = ResponseType(response_type)
        now = self._clock()
        review_intervals = self.settings.review_intervals

        card_logs = [log for log in self.logs if log.card_id == card.id]
        next_review_date = calculate_next_review_date(
            card.id,
            response_type,
            card_logs,
            intervals=review_intervals.base_intervals(),
            multipliers=review_intervals.multipliers(),
            now=now
        )

        study_log = StudyLog(
            id=str(uuid.uuid4()),
            card_id=card.id,
            deck_id=self.deck.id,
            studied_at=now,
            response_time_ms=response_time_ms,
            response_type=response_type,
            next_review_date=next_review_date,
        )

        if not self.store.save_log(study_log):
            raise PersistenceError(f"Failed to save study log for card {card.id}")

        self.logs.append(study_log)
        self.stats.record(response_type, calculate_success_rate(response_type, response_time_ms))
        self.position += 1

        if self.position >= len(self.queue):
            self.status = SessionStatus.COMPLETE
            logger.info("Session %s complete: %d cards", self.session_id, len(self.queue))

        return study_log
