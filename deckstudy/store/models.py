"""
SQLAlchemy ORM models for the record store.

Cards, decks and settings are plain records; study logs are append-only.
"""

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class CardModel(Base):
    """A flashcard's content. Scheduling state lives in study_logs."""
    __tablename__ = 'cards'

    id = Column(String(255), primary_key=True)
    word = Column(String(255), nullable=False)
    phonetic = Column(String(255), nullable=True)
    etymology = Column(Text, nullable=True)
    meanings = Column(JSON, nullable=False, default=list)
    memorization_tip = Column(Text, nullable=True)
    tags = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<CardModel({self.id}, {self.word})>"


class DeckModel(Base):
    """A deck and the ordered ids of its cards."""
    __tablename__ = 'decks'

    id = Column(String(255), primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    card_ids = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<DeckModel({self.id}, {self.name}, cards={len(self.card_ids or [])})>"


class StudyLogModel(Base):
    """
    One recorded answer. Never updated or deleted by the engine.
    """
    __tablename__ = 'study_logs'

    id = Column(String(255), primary_key=True)
    card_id = Column(String(255), nullable=False, index=True)
    deck_id = Column(String(255), nullable=False, index=True)

    studied_at = Column(DateTime(timezone=True), nullable=False, index=True)
    response_time_ms = Column(Integer, nullable=False)
    response_type = Column(String(20), nullable=False)  # wrong/again/hard/correct/easy
    next_review_date = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<StudyLogModel({self.id}, card={self.card_id}, {self.response_type})>"


class SettingsModel(Base):
    """Key/value settings blob, merged over defaults on read."""
    __tablename__ = 'user_settings'

    key = Column(String(50), primary_key=True)
    value = Column(JSON, nullable=False)

    def __repr__(self):
        return f"<SettingsModel({self.key})>"
