import itertools
from datetime import datetime, timedelta, timezone

import pytest

from deckstudy import Card, Deck, ResponseType, SqlRecordStore, StudyLog


NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def store():
    """Fresh in-memory record store per test."""
    return SqlRecordStore("sqlite://")


@pytest.fixture
def make_log():
    counter = itertools.count(1)

    def _make_log(
        card_id,
        studied_at,
        next_review_date=None,
        response_type=ResponseType.CORRECT,
        deck_id="deck-1",
        response_time_ms=3000,
    ):
        if next_review_date is None:
            next_review_date = studied_at + timedelta(days=3)
        return StudyLog(
            id=f"log-{next(counter)}",
            card_id=card_id,
            deck_id=deck_id,
            studied_at=studied_at,
            response_time_ms=response_time_ms,
            response_type=response_type,
            next_review_date=next_review_date,
        )

    return _make_log


@pytest.fixture
def seeded_store(store):
    """Store with deck-1 holding five cards c1..c5."""
    card_ids = [f"c{i}" for i in range(1, 6)]
    for card_id in card_ids:
        assert store.save_card(Card(id=card_id, word=f"word {card_id}"))
    assert store.save_deck(Deck(id="deck-1", name="Core", card_ids=card_ids))
    return store
