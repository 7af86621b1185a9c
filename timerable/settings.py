"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/Timerable/settings.json

The file holds both user preferences and the small amount of timer
state that has to survive a restart (status, subject, chunk position).
All reads and writes go through one ``SettingsStore`` that is passed
explicitly to whoever needs it.

Usage::

    store = SettingsStore.load()
    store.update(daily_goal=10)
    store.get_number_of_sessions()
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields, replace
from pathlib import Path

from .timer.session import (
    DEFAULT_LONG_BREAK_DURATION,
    DEFAULT_NUMBER_OF_SESSIONS,
    DEFAULT_SHORT_BREAK_DURATION,
    DEFAULT_WORK_DURATION,
    SessionPlan,
    TimerStatus,
)

logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "Timerable"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences plus persisted timer state."""

    # ── timer ─────────────────────────────────────────────────────────
    work_duration: int = DEFAULT_WORK_DURATION         # seconds
    short_break_duration: int = DEFAULT_SHORT_BREAK_DURATION
    long_break_duration: int = DEFAULT_LONG_BREAK_DURATION
    number_of_sessions: int = DEFAULT_NUMBER_OF_SESSIONS
    daily_goal: int = 8

    # ── feedback ──────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100
    haptics_enabled: bool = True

    # ── timer state (written by the engine) ───────────────────────────
    timer_status: str = TimerStatus.READY.value
    subject: str = ""
    chunk_index: int = 0
    chunk_elapsed: int = 0

    # ── window ────────────────────────────────────────────────────────
    window_width: int = 420
    window_height: int = 680


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from disk, falling back to defaults."""
    path = path or SETTINGS_PATH
    try:
        if path.exists():
            data = json.loads(path.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
    return Settings()


def save_settings(settings: Settings, path: Path | None = None) -> None:
    """Write settings to disk as JSON."""
    path = path or SETTINGS_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )


class SettingsStore:
    """Single source of truth for configuration and persisted timer state.

    Every setter writes the file immediately.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        path: Path | None = None,
    ) -> None:
        self._settings = settings if settings is not None else Settings()
        self._path = path or SETTINGS_PATH

    @classmethod
    def load(cls, path: Path | None = None) -> SettingsStore:
        return cls(load_settings(path), path=path)

    @property
    def settings(self) -> Settings:
        """A copy of the current settings."""
        return replace(self._settings)

    @property
    def path(self) -> Path:
        return self._path

    def save(self) -> None:
        save_settings(self._settings, self._path)

    def update(self, **changes) -> None:
        """Set several fields at once and save."""
        valid_keys = {f.name for f in fields(Settings)}
        unknown = set(changes) - valid_keys
        if unknown:
            raise AttributeError(f"unknown settings: {', '.join(sorted(unknown))}")
        self._settings = replace(self._settings, **changes)
        self.save()

    # ── timer status ──────────────────────────────────────────────────

    def get_timer_status(self) -> TimerStatus:
        try:
            return TimerStatus(self._settings.timer_status)
        except ValueError:
            logger.warning(
                "Unknown timer status %r, treating as ready",
                self._settings.timer_status,
            )
            return TimerStatus.READY

    def set_timer_status(self, status: TimerStatus) -> None:
        self._settings.timer_status = status.value
        self.save()

    # ── session configuration ─────────────────────────────────────────

    def get_number_of_sessions(self) -> int:
        return self._settings.number_of_sessions

    def get_daily_goal(self) -> int:
        return self._settings.daily_goal

    def session_plan(self) -> SessionPlan:
        return SessionPlan.from_settings(self._settings)

    # ── subject ───────────────────────────────────────────────────────

    def get_subject(self) -> str:
        return self._settings.subject

    def set_subject(self, name: str) -> None:
        self._settings.subject = name
        self.save()

    # ── chunk position ────────────────────────────────────────────────

    def get_session_position(self) -> tuple[int, int]:
        return self._settings.chunk_index, self._settings.chunk_elapsed

    def set_session_position(self, index: int, elapsed: int) -> None:
        self._settings.chunk_index = index
        self._settings.chunk_elapsed = elapsed
        self.save()
