"""
Abstract Record Store

Defines the persistence interface the study engine consumes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from deckstudy.schemas import Card, Deck, StudyLog, UserSettings
from deckstudy.selection import today_window


class RecordStore(ABC):
    """
    Key-value style record store for cards, decks, study logs and settings.

    Reads raise on I/O failure. Writes report failure by returning False.

    Subclasses implement the primitive operations; the deck and log helpers
    below are built on top of them.
    """

    # ---- Cards ----

    @abstractmethod
    def get_all_cards(self) -> list[Card]:
        """Return every card."""

    @abstractmethod
    def get_card_by_id(self, card_id: str) -> Optional[Card]:
        """Return the card, or None if absent."""

    @abstractmethod
    def save_card(self, card: Card) -> bool:
        """Insert or update a card."""

    @abstractmethod
    def remove_card(self, card_id: str) -> bool:
        """Delete a card. False if it did not exist."""

    # ---- Decks ----

    @abstractmethod
    def get_all_decks(self) -> list[Deck]:
        """Return every deck."""

    @abstractmethod
    def get_deck_by_id(self, deck_id: str) -> Optional[Deck]:
        """Return the deck, or None if absent."""

    @abstractmethod
    def save_deck(self, deck: Deck) -> bool:
        """Insert or update a deck."""

    @abstractmethod
    def remove_deck(self, deck_id: str) -> bool:
        """Delete a deck. False if it did not exist."""

    # ---- Study logs ----

    @abstractmethod
    def get_all_logs(self) -> list[StudyLog]:
        """Return every study log, oldest first."""

    @abstractmethod
    def save_log(self, log: StudyLog) -> bool:
        """Append a study log."""

    # ---- Settings ----

    @abstractmethod
    def get_settings(self) -> UserSettings:
        """Return stored settings merged over defaults."""

    @abstractmethod
    def save_settings(self, settings: UserSettings) -> bool:
        """Persist settings."""

    @abstractmethod
    def reset_settings(self) -> bool:
        """Restore default settings."""

    # ---- Helpers ----

    def add_cards_to_deck(self, deck_id: str, card_ids: list[str]) -> bool:
        """Append card ids to a deck, skipping ones already present."""
        deck = self.get_deck_by_id(deck_id)
        if deck is None:
            return False
        merged = list(dict.fromkeys([*deck.card_ids, *card_ids]))
        return self.save_deck(deck.model_copy(update={"card_ids": merged}))

    def remove_cards_from_deck(self, deck_id: str, card_ids: list[str]) -> bool:
        """Drop card ids from a deck."""
        deck = self.get_deck_by_id(deck_id)
        if deck is None:
            return False
        to_remove = set(card_ids)
        remaining = [card_id for card_id in deck.card_ids if card_id not in to_remove]
        return self.save_deck(deck.model_copy(update={"card_ids": remaining}))

    def get_logs_by_card(self, card_id: str) -> list[StudyLog]:
        """A card's logs, most recent first."""
        logs = [log for log in self.get_all_logs() if log.card_id == card_id]
        return sorted(logs, key=lambda log: log.studied_at, reverse=True)

    def get_logs_by_deck(self, deck_id: str) -> list[StudyLog]:
        """A deck's logs, most recent first."""
        logs = [log for log in self.get_all_logs() if log.deck_id == deck_id]
        return sorted(logs, key=lambda log: log.studied_at, reverse=True)

    def get_logs_between(self, start: datetime, end: datetime) -> list[StudyLog]:
        """Logs with start <= studied_at < end."""
        return [log for log in self.get_all_logs() if start <= log.studied_at < end]

    def get_today_logs(self, now: Optional[datetime] = None) -> list[StudyLog]:
        """Logs studied during the local day containing `now`."""
        start, end = today_window(now)
        return self.get_logs_between(start, end)
