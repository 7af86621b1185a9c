"""Timer package."""

from .engine import SessionEngine, QtTicker, TICK_INTERVAL_MS
from .errors import (
    TimerError,
    InvalidStateTransition,
    InvalidConfiguration,
    NoActiveChunk,
)
from .goals import GoalCounter, session_goal, daily_goal
from .session import (
    TimerStatus,
    ChunkType,
    TimeChunk,
    SessionPlan,
    CHUNK_LABELS,
)

__all__ = [
    "SessionEngine",
    "QtTicker",
    "TICK_INTERVAL_MS",
    "TimerError",
    "InvalidStateTransition",
    "InvalidConfiguration",
    "NoActiveChunk",
    "GoalCounter",
    "session_goal",
    "daily_goal",
    "TimerStatus",
    "ChunkType",
    "TimeChunk",
    "SessionPlan",
    "CHUNK_LABELS",
]
