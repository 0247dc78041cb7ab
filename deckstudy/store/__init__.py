"""
Record store package exports.
"""

from deckstudy.store.base import RecordStore
from deckstudy.store.database import SqlRecordStore, get_engine

__all__ = [
    "RecordStore",
    "SqlRecordStore",
    "get_engine",
]
