"""
Import a deck of cards from CSV.

Expected columns:
- word        (required)
- definition  (required)
- phonetic, part_of_speech, example, translation, tags  (optional)

`tags` is a comma-separated list. Rows are deduplicated on (word, definition);
re-running the import with the same deck id updates the existing cards.

Usage:
    python -m scripts.data.import_deck_csv data/words.csv --deck-name "Core 1000" [--deck-id ID] [--dry-run]
"""

from __future__ import annotations

import argparse
import uuid
from pathlib import Path
from typing import Optional

import pandas as pd

from deckstudy import Card, Deck, SqlRecordStore
from deckstudy.schemas import Example, Meaning
from deckstudy.store import RecordStore

# Column names
WORD_COL = "word"
DEFINITION_COL = "definition"
REQUIRED_COLUMNS = (WORD_COL, DEFINITION_COL)

# Stable ids: same deck + word + definition -> same card id
CARD_NAMESPACE = uuid.UUID("6f1c3c52-8d0e-4f5e-9a57-2f3a6a1d4b10")


def _optional(row: pd.Series, column: str) -> Optional[str]:
    value = row.get(column)
    if value is None or pd.isna(value):
        return None
    value = str(value).strip()
    return value or None


def rows_to_cards(df: pd.DataFrame, deck_id: str) -> list[Card]:
    """
    Convert CSV rows into cards.

    Raises:
        ValueError: A required column is missing
    """
    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"CSV missing required columns: {', '.join(missing)}")

    df = df.dropna(subset=list(REQUIRED_COLUMNS))
    df = df.assign(
        **{col: df[col].astype(str).str.strip() for col in REQUIRED_COLUMNS}
    )
    df = df[(df[WORD_COL] != "") & (df[DEFINITION_COL] != "")]
    df = df.drop_duplicates(subset=list(REQUIRED_COLUMNS), keep="first")

    cards = []
    for _, row in df.iterrows():
        examples = []
        example_text = _optional(row, "example")
        if example_text:
            examples.append(Example(text=example_text, translation=_optional(row, "translation")))

        tags_value = _optional(row, "tags")
        tags = [tag.strip() for tag in tags_value.split(",") if tag.strip()] if tags_value else []

        card_id = str(uuid.uuid5(CARD_NAMESPACE, f"{deck_id}|{row[WORD_COL]}|{row[DEFINITION_COL]}"))
        cards.append(Card(
            id=card_id,
            word=row[WORD_COL],
            phonetic=_optional(row, "phonetic"),
            meanings=[Meaning(
                definition=row[DEFINITION_COL],
                part_of_speech=_optional(row, "part_of_speech"),
                examples=examples,
            )],
            tags=tags,
        ))
    return cards


def import_deck(
    store: RecordStore,
    csv_path: Path,
    deck_name: str,
    deck_id: Optional[str] = None,
    dry_run: bool = False
) -> tuple[Deck, list[Card]]:
    """
    Import a CSV into a (new or existing) deck.

    Returns:
        The deck and the cards read from the CSV
    """
    deck_id = deck_id or str(uuid.uuid4())
    cards = rows_to_cards(pd.read_csv(csv_path), deck_id)

    deck = store.get_deck_by_id(deck_id) or Deck(id=deck_id, name=deck_name)
    card_ids = list(dict.fromkeys([*deck.card_ids, *(card.id for card in cards)]))
    deck = deck.model_copy(update={"name": deck_name, "card_ids": card_ids})

    if dry_run:
        return deck, cards

    for card in cards:
        if not store.save_card(card):
            raise RuntimeError(f"Failed to save card {card.word!r}")
    if not store.save_deck(deck):
        raise RuntimeError(f"Failed to save deck {deck_name!r}")

    return deck, cards


def main():
    parser = argparse.ArgumentParser(description="Import a deck of cards from CSV")
    parser.add_argument("csv_path", type=Path, help="CSV file to import")
    parser.add_argument("--deck-name", required=True, help="Deck name")
    parser.add_argument("--deck-id", default=None, help="Existing deck id to update")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse the CSV without writing to the database"
    )
    args = parser.parse_args()

    store = SqlRecordStore()
    deck, cards = import_deck(
        store,
        args.csv_path,
        args.deck_name,
        deck_id=args.deck_id,
        dry_run=args.dry_run
    )

    prefix = "[DRY RUN] " if args.dry_run else ""
    print(f"{prefix}Deck '{deck.name}' ({deck.id}): {len(cards)} cards imported, {len(deck.card_ids)} total")


if __name__ == "__main__":
    main()
