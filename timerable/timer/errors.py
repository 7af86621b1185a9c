"""Errors raised by the session engine."""


class TimerError(Exception):
    """Base exception for session engine failures."""


class InvalidStateTransition(TimerError):
    """Raised when an operation is not legal from the current status."""


class InvalidConfiguration(TimerError):
    """Raised when a session cannot be built from the configured values."""


class NoActiveChunk(TimerError):
    """Raised when a chunk is queried or skipped with no session in progress."""
