"""
Errors raised by the study engine.

Expected states (empty queue, nothing due) are ordinary return values;
these exceptions cover the failures a caller has to react to.
"""


class DeckStudyError(Exception):
    """Base class for all deckstudy errors."""


class DeckNotFoundError(DeckStudyError):
    """The requested deck id is not in the record store."""

    def __init__(self, deck_id: str):
        super().__init__(f"Deck not found (id: {deck_id})")
        self.deck_id = deck_id


class PersistenceError(DeckStudyError):
    """The record store refused or failed to write a record."""
