"""
Database - Record Store I/O Operations

SQLAlchemy implementation of the record store. Works with any SQLAlchemy
URL; SQLite by default (see deckstudy.config).

This module handles ONLY database I/O.
Scheduling logic lives in deckstudy.scheduling and deckstudy.selection.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from sqlalchemy import create_engine, inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from deckstudy import config
from deckstudy.constants import ResponseType
from deckstudy.schemas import Card, Deck, StudyLog, UserSettings, utc_now
from deckstudy.store.base import RecordStore
from deckstudy.store.models import (
    Base,
    CardModel,
    DeckModel,
    SettingsModel,
    StudyLogModel,
)

logger = logging.getLogger(__name__)

SETTINGS_KEY = "user_settings"


def get_engine(database_url: str):
    """
    Build an SQLAlchemy engine for the record store.

    In-memory SQLite shares one connection so every session sees the same
    database.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, echo=False, **kwargs)

    return create_engine(
        database_url,
        pool_size=5,           # Keep 5 connections open
        max_overflow=10,       # Allow up to 10 extra connections
        pool_pre_ping=True,    # Verify connections before use
        echo=False
    )


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo; stored values are always UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# ---- Row <-> model conversion ----

def _card_from_row(row: CardModel) -> Card:
    return Card(
        id=row.id,
        word=row.word,
        phonetic=row.phonetic,
        etymology=row.etymology,
        meanings=row.meanings or [],
        memorization_tip=row.memorization_tip,
        tags=row.tags or [],
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


def _deck_from_row(row: DeckModel) -> Deck:
    return Deck(
        id=row.id,
        name=row.name,
        description=row.description,
        card_ids=list(row.card_ids or []),
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


def _log_from_row(row: StudyLogModel) -> StudyLog:
    return StudyLog(
        id=row.id,
        card_id=row.card_id,
        deck_id=row.deck_id,
        studied_at=_as_utc(row.studied_at),
        response_time_ms=row.response_time_ms,
        response_type=ResponseType(row.response_type),
        next_review_date=_as_utc(row.next_review_date),
    )


class SqlRecordStore(RecordStore):
    """
    Record store backed by an SQL database.

    Every call opens and closes its own session. Writes roll back and return
    False on database errors; reads let errors propagate.
    """

    def __init__(self, database_url: Optional[str] = None, create_tables: bool = True):
        self.database_url = database_url or config.get_database_url()
        self.engine = get_engine(self.database_url)
        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)
        if create_tables:
            self.init_db()

    # ---- Schema ----

    def init_db(self) -> None:
        """
        Create tables if they don't exist.

        Safe to call multiple times.
        """
        existing_tables = set(inspect(self.engine).get_table_names())
        if not set(Base.metadata.tables).issubset(existing_tables):
            Base.metadata.create_all(self.engine)

    def reset_db(self) -> None:
        """
        DANGEROUS: Delete all data and recreate tables.

        All cards, decks, settings and study history will be lost!
        """
        Base.metadata.drop_all(self.engine)
        logger.warning("All record store tables dropped (%s)", self.engine.url)
        self.init_db()

    def get_session(self) -> Session:
        return self._session_factory()

    def _write(self, action: str, operation: Callable[[Session], bool]) -> bool:
        session = self.get_session()
        try:
            result = operation(session)
            if result:
                session.commit()
            return result
        except SQLAlchemyError:
            session.rollback()
            logger.exception("Record store write failed: %s", action)
            return False
        finally:
            session.close()

    # ---- Cards ----

    def get_all_cards(self) -> list[Card]:
        session = self.get_session()
        try:
            return [_card_from_row(row) for row in session.query(CardModel).all()]
        finally:
            session.close()

    def get_card_by_id(self, card_id: str) -> Optional[Card]:
        session = self.get_session()
        try:
            row = session.get(CardModel, card_id)
            return _card_from_row(row) if row is not None else None
        finally:
            session.close()

    def save_card(self, card: Card) -> bool:
        def _save(session: Session) -> bool:
            now = utc_now()
            data = card.model_dump(mode="json", exclude={"id", "created_at", "updated_at"})
            row = session.get(CardModel, card.id)
            if row is None:
                row = CardModel(id=card.id, created_at=now)
                session.add(row)
            for key, value in data.items():
                setattr(row, key, value)
            row.updated_at = now
            return True

        return self._write(f"save card {card.id}", _save)

    def remove_card(self, card_id: str) -> bool:
        def _remove(session: Session) -> bool:
            row = session.get(CardModel, card_id)
            if row is None:
                return False
            session.delete(row)
            return True

        return self._write(f"remove card {card_id}", _remove)

    # ---- Decks ----

    def get_all_decks(self) -> list[Deck]:
        session = self.get_session()
        try:
            return [_deck_from_row(row) for row in session.query(DeckModel).all()]
        finally:
            session.close()

    def get_deck_by_id(self, deck_id: str) -> Optional[Deck]:
        session = self.get_session()
        try:
            row = session.get(DeckModel, deck_id)
            return _deck_from_row(row) if row is not None else None
        finally:
            session.close()

    def save_deck(self, deck: Deck) -> bool:
        def _save(session: Session) -> bool:
            now = utc_now()
            row = session.get(DeckModel, deck.id)
            if row is None:
                row = DeckModel(id=deck.id, created_at=now)
                session.add(row)
            row.name = deck.name
            row.description = deck.description
            row.card_ids = list(deck.card_ids)
            row.updated_at = now
            return True

        return self._write(f"save deck {deck.id}", _save)

    def remove_deck(self, deck_id: str) -> bool:
        def _remove(session: Session) -> bool:
            row = session.get(DeckModel, deck_id)
            if row is None:
                return False
            session.delete(row)
            return True

        return self._write(f"remove deck {deck_id}", _remove)

    # ---- Study logs ----

    def get_all_logs(self) -> list[StudyLog]:
        session = self.get_session()
        try:
            rows = session.query(StudyLogModel).order_by(StudyLogModel.studied_at.asc()).all()
            return [_log_from_row(row) for row in rows]
        finally:
            session.close()

    def get_logs_between(self, start: datetime, end: datetime) -> list[StudyLog]:
        session = self.get_session()
        try:
            rows = session.query(StudyLogModel).filter(
                StudyLogModel.studied_at >= _as_utc(start),
                StudyLogModel.studied_at < _as_utc(end)
            ).order_by(StudyLogModel.studied_at.asc()).all()
            return [_log_from_row(row) for row in rows]
        finally:
            session.close()

    def save_log(self, log: StudyLog) -> bool:
        def _insert(session: Session) -> bool:
            session.add(StudyLogModel(
                id=log.id,
                card_id=log.card_id,
                deck_id=log.deck_id,
                studied_at=_as_utc(log.studied_at),
                response_time_ms=log.response_time_ms,
                response_type=log.response_type.value,
                next_review_date=_as_utc(log.next_review_date),
            ))
            return True

        return self._write(f"save log {log.id}", _insert)

    # ---- Settings ----

    def get_settings(self) -> UserSettings:
        session = self.get_session()
        try:
            row = session.get(SettingsModel, SETTINGS_KEY)
            stored = row.value if row is not None else {}
        finally:
            session.close()

        defaults = UserSettings().model_dump()
        merged = {**defaults, **stored}
        merged["review_intervals"] = {
            **defaults["review_intervals"],
            **(stored.get("review_intervals") or {}),
        }
        return UserSettings.model_validate(merged)

    def save_settings(self, settings: UserSettings) -> bool:
        def _save(session: Session) -> bool:
            value = settings.model_dump(mode="json")
            row = session.get(SettingsModel, SETTINGS_KEY)
            if row is None:
                session.add(SettingsModel(key=SETTINGS_KEY, value=value))
            else:
                row.value = value
            return True

        return self._write("save settings", _save)

    def reset_settings(self) -> bool:
        return self.save_settings(UserSettings())
