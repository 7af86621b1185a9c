"""Session model: chunk types, timer status, and the chunk schedule.

A session is the ordered list of time chunks making up one timer cycle.
With ``N`` work sessions configured the schedule is::

    work, short_break, work, short_break, ..., work, long_break

i.e. every work chunk is followed by a break and the last break of the
cycle is the long one, giving ``2 * N`` chunks in total.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING

from .errors import InvalidConfiguration

if TYPE_CHECKING:
    from ..settings import Settings


# ── enums ─────────────────────────────────────────────────────────────────


class TimerStatus(Enum):
    READY = "ready"
    TIMING = "timing"
    PAUSED = "paused"


class ChunkType(Enum):
    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"

    @property
    def is_break(self) -> bool:
        return self is not ChunkType.WORK


CHUNK_LABELS: dict[ChunkType, str] = {
    ChunkType.WORK: "Work",
    ChunkType.SHORT_BREAK: "Short Break",
    ChunkType.LONG_BREAK: "Long Break",
}


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_WORK_DURATION = 25 * 60
DEFAULT_SHORT_BREAK_DURATION = 5 * 60
DEFAULT_LONG_BREAK_DURATION = 15 * 60
DEFAULT_NUMBER_OF_SESSIONS = 4


# ── chunk ─────────────────────────────────────────────────────────────────


@dataclass
class TimeChunk:
    """One scheduled interval.  ``elapsed`` only ever moves forward."""

    type: ChunkType
    duration: int
    elapsed: int = 0

    def __post_init__(self) -> None:
        if self.duration <= 0:
            raise InvalidConfiguration(
                f"{self.type.value} chunk needs a positive duration, "
                f"got {self.duration}"
            )
        if not 0 <= self.elapsed <= self.duration:
            raise InvalidConfiguration(
                f"elapsed {self.elapsed} outside 0..{self.duration}"
            )

    @property
    def remaining(self) -> int:
        return self.duration - self.elapsed

    @property
    def progress(self) -> float:
        """0.0 → 1.0 progress through the chunk."""
        return self.elapsed / self.duration

    @property
    def is_finished(self) -> bool:
        return self.elapsed >= self.duration

    @property
    def label(self) -> str:
        return CHUNK_LABELS[self.type]

    def snapshot(self) -> TimeChunk:
        return replace(self)


# ── plan ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SessionPlan:
    """The configuration a session is built from."""

    number_of_sessions: int = DEFAULT_NUMBER_OF_SESSIONS
    work_duration: int = DEFAULT_WORK_DURATION
    short_break_duration: int = DEFAULT_SHORT_BREAK_DURATION
    long_break_duration: int = DEFAULT_LONG_BREAK_DURATION

    @classmethod
    def from_settings(cls, settings: Settings) -> SessionPlan:
        return cls(
            number_of_sessions=settings.number_of_sessions,
            work_duration=settings.work_duration,
            short_break_duration=settings.short_break_duration,
            long_break_duration=settings.long_break_duration,
        )

    @property
    def length(self) -> int:
        """Number of chunks a session built from this plan contains."""
        return 2 * self.number_of_sessions

    def validate(self) -> None:
        if self.number_of_sessions < 1:
            raise InvalidConfiguration(
                "a session needs at least one work chunk, "
                f"got {self.number_of_sessions}"
            )
        for name in ("work_duration", "short_break_duration", "long_break_duration"):
            value = getattr(self, name)
            if value <= 0:
                raise InvalidConfiguration(f"{name} must be positive, got {value}")

    def build(self) -> list[TimeChunk]:
        """Return a fresh chunk list for one session."""
        self.validate()
        chunks: list[TimeChunk] = []
        for i in range(self.number_of_sessions):
            chunks.append(TimeChunk(ChunkType.WORK, self.work_duration))
            if i < self.number_of_sessions - 1:
                chunks.append(
                    TimeChunk(ChunkType.SHORT_BREAK, self.short_break_duration)
                )
            else:
                chunks.append(
                    TimeChunk(ChunkType.LONG_BREAK, self.long_break_duration)
                )
        return chunks


def count_work(chunks: list[TimeChunk]) -> int:
    return sum(1 for c in chunks if c.type == ChunkType.WORK)
