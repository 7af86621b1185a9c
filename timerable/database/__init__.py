"""Database package."""

from .db import configure_engine, get_session, init_db
from .models import Subject, ChunkRecord, DailyStats
from .persistence import DailyGoal, PersistenceService

__all__ = [
    "configure_engine",
    "get_session",
    "init_db",
    "Subject",
    "ChunkRecord",
    "DailyStats",
    "DailyGoal",
    "PersistenceService",
]
