"""Persistence service: subjects, completed chunks, and daily progress.

The engine only ever reads through this service (subjects for the
picker, today's completed count for the daily goal).  Completed chunks
are written by the controller when the engine reports a boundary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime

from sqlalchemy import func

from ..timer.session import ChunkType, TimeChunk
from .db import get_session
from .models import ChunkRecord, DailyStats, Subject

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DailyGoal:
    date: date
    sessions_completed: int = 0
    focus_seconds: int = 0


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValueError("subject name must not be blank")
    return cleaned


class PersistenceService:
    """Thin query layer over the SQLAlchemy models."""

    # ── subjects ──────────────────────────────────────────────────────

    def fetch_all_subjects(self) -> list[Subject]:
        with get_session() as db:
            return db.query(Subject).order_by(Subject.name).all()

    def fetch_subject(self, name: str) -> Subject | None:
        with get_session() as db:
            return db.query(Subject).filter(Subject.name == name).first()

    def add_subject(self, name: str) -> Subject:
        name = _clean_name(name)
        with get_session() as db:
            if db.query(Subject).filter(Subject.name == name).first():
                raise ValueError(f"subject {name!r} already exists")
            subject = Subject(name=name)
            db.add(subject)
            db.flush()
        logger.info("Subject added: %s", name)
        return subject

    def rename_subject(self, old_name: str, new_name: str) -> Subject:
        new_name = _clean_name(new_name)
        with get_session() as db:
            subject = db.query(Subject).filter(Subject.name == old_name).first()
            if subject is None:
                raise LookupError(f"no subject named {old_name!r}")
            if new_name != old_name and (
                db.query(Subject).filter(Subject.name == new_name).first()
            ):
                raise ValueError(f"subject {new_name!r} already exists")
            subject.name = new_name
            # Keep the history attached to the renamed subject
            db.query(ChunkRecord).filter(
                ChunkRecord.subject_name == old_name,
            ).update({ChunkRecord.subject_name: new_name})
        logger.info("Subject renamed: %s -> %s", old_name, new_name)
        return subject

    def delete_subject(self, name: str) -> None:
        with get_session() as db:
            subject = db.query(Subject).filter(Subject.name == name).first()
            if subject is None:
                raise LookupError(f"no subject named {name!r}")
            db.delete(subject)
        logger.info("Subject deleted: %s", name)

    # ── progress ──────────────────────────────────────────────────────

    def fetch_daily_goal(self, day: date | None = None) -> DailyGoal:
        day = day or date.today()
        with get_session() as db:
            stats = db.query(DailyStats).filter(DailyStats.date == day).first()
            if stats is None:
                return DailyGoal(day)
            return DailyGoal(day, stats.sessions_completed, stats.focus_seconds)

    def record_chunk(
        self,
        chunk: TimeChunk,
        subject_name: str | None,
        completed_at: datetime | None = None,
    ) -> ChunkRecord:
        """Log a completed chunk; work chunks count toward the daily goal."""
        completed_at = completed_at or datetime.now()
        with get_session() as db:
            record = ChunkRecord(
                subject_name=subject_name,
                chunk_type=chunk.type.value,
                duration_seconds=chunk.duration,
                completed_at=completed_at,
            )
            db.add(record)

            if chunk.type == ChunkType.WORK:
                day = completed_at.date()
                stats = db.query(DailyStats).filter(DailyStats.date == day).first()
                if stats is None:
                    stats = DailyStats(
                        date=day, sessions_completed=0, focus_seconds=0,
                    )
                    db.add(stats)
                stats.sessions_completed += 1
                stats.focus_seconds += chunk.duration
            db.flush()
        return record

    def fetch_subject_totals(self) -> list[tuple[str, int]]:
        """Total completed work seconds per subject, every subject listed."""
        with get_session() as db:
            totals = dict(
                db.query(
                    ChunkRecord.subject_name,
                    func.sum(ChunkRecord.duration_seconds),
                )
                .filter(ChunkRecord.chunk_type == ChunkType.WORK.value)
                .group_by(ChunkRecord.subject_name)
                .all()
            )
            names = [s.name for s in db.query(Subject).order_by(Subject.name)]
        return [(name, int(totals.get(name) or 0)) for name in names]
