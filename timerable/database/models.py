"""SQLAlchemy ORM models for Timerable."""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Date
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class Subject(Base):
    """Something the user studies or works on; labels a session."""

    __tablename__ = "subjects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    def __repr__(self) -> str:
        return f"<Subject id={self.id} name={self.name!r}>"


class ChunkRecord(Base):
    """One time chunk that ran to completion."""

    __tablename__ = "chunk_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    subject_name = Column(String(100), nullable=True)
    chunk_type = Column(String(20), nullable=False)  # work | short_break | long_break
    duration_seconds = Column(Integer, nullable=False, default=0)
    completed_at = Column(DateTime, nullable=False, default=datetime.now)

    def __repr__(self) -> str:
        return (
            f"<ChunkRecord id={self.id} type={self.chunk_type} "
            f"subject={self.subject_name!r}>"
        )


class DailyStats(Base):
    """Completed work chunks per calendar day, for the daily goal."""

    __tablename__ = "daily_stats"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False, unique=True)
    sessions_completed = Column(Integer, nullable=False, default=0)
    focus_seconds = Column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return (
            f"<DailyStats date={self.date} sessions={self.sessions_completed} "
            f"focus={self.focus_seconds}s>"
        )
