"""Session timer state machine for Timerable.

States
------
READY     No session in progress.  A preview session built from the
          current settings is held so the UI can show the first chunk.
TIMING    The current chunk is counting up once per second.
PAUSED    Ticking suspended; elapsed time of the current chunk is kept.

Transitions
-----------
READY → TIMING                 (start_session)
TIMING → PAUSED                (pause)
PAUSED → TIMING                (resume)
TIMING | PAUSED → TIMING       (skip, chunks remain)
TIMING | PAUSED → READY        (skip past the last chunk, reset)
TIMING → READY                 (tick completes the last chunk)

The engine never touches sounds, persistence of completions, or widgets.
It mirrors its status into the settings store so an interrupted session
can be picked up after a restart.  The chunk position is written on
every transition and every ``POSITION_SAVE_TICKS`` ticks while timing,
so a crash loses at most that many seconds of the current chunk.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .errors import InvalidConfiguration, InvalidStateTransition, NoActiveChunk
from .session import TimeChunk, TimerStatus, count_work

if TYPE_CHECKING:
    from ..settings import SettingsStore

logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000
POSITION_SAVE_TICKS = 15


# ── tick source ───────────────────────────────────────────────────────────


class QtTicker(QObject):
    """Periodic tick source backed by a ``QTimer``.

    ``start`` and ``stop`` are idempotent.
    """

    def __init__(
        self,
        callback: Callable[[], None],
        parent: QObject | None = None,
        *,
        interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(callback)

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    def start(self) -> None:
        if not self._timer.isActive():
            self._timer.start()

    def stop(self) -> None:
        if self._timer.isActive():
            self._timer.stop()


# ── engine ────────────────────────────────────────────────────────────────


class SessionEngine(QObject):
    """Pomodoro session engine: status, chunk sequence, and goal counts.

    Signals
    -------
    chunk_changed(chunk: TimeChunk)
        The active chunk ticked or a new chunk became current.  Carries
        a snapshot copy.
    chunk_completed(chunk: TimeChunk)
        A chunk ran to its full duration.  Fires once per boundary,
        before the matching ``chunk_changed``.
    session_finished()
        The session completed or was reset.
    goals_changed()
        Session/daily goal counts should be recomputed.
    status_changed(status: TimerStatus)
        Emitted on every status transition.
    """

    chunk_changed = pyqtSignal(object)
    chunk_completed = pyqtSignal(object)
    session_finished = pyqtSignal()
    goals_changed = pyqtSignal()
    status_changed = pyqtSignal(object)

    def __init__(
        self,
        store: SettingsStore,
        parent: QObject | None = None,
        *,
        interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._store = store
        self._lock = threading.RLock()

        self._status: TimerStatus = TimerStatus.READY
        self._session: list[TimeChunk] = []
        self._index: int = 0
        self._subject: str | None = None

        self._ticker = QtTicker(self.tick, self, interval_ms=interval_ms)

        self._restore()

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def status(self) -> TimerStatus:
        with self._lock:
            return self._status

    @property
    def subject(self) -> str | None:
        """Subject bound at ``start_session``; None while READY."""
        with self._lock:
            return self._subject

    @property
    def session(self) -> tuple[TimeChunk, ...]:
        with self._lock:
            return tuple(c.snapshot() for c in self._session)

    @property
    def chunk_index(self) -> int:
        with self._lock:
            return self._index

    @property
    def current_chunk(self) -> TimeChunk:
        """The chunk to display: the active one, or the preview's first.

        Raises ``NoActiveChunk`` when no session could be built.
        """
        with self._lock:
            if self._index >= len(self._session):
                raise NoActiveChunk("no session has been built")
            return self._session[self._index].snapshot()

    @property
    def active_chunk(self) -> TimeChunk:
        """The chunk of the session in progress (not available when READY)."""
        with self._lock:
            if self._status == TimerStatus.READY:
                raise NoActiveChunk("no session in progress")
            return self._session[self._index].snapshot()

    @property
    def total_sessions(self) -> int:
        """Work chunks in the current (or preview) session."""
        with self._lock:
            return count_work(self._session)

    @property
    def session_count(self) -> int:
        """Work chunks already passed in this session (breaks excluded)."""
        with self._lock:
            remaining_work = count_work(self._session[self._index:])
            return self.total_sessions - remaining_work

    @property
    def is_ticking(self) -> bool:
        return self._ticker.is_active

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start_session(self, subject: str) -> None:
        """Build a new session and start timing its first chunk."""
        with self._lock:
            if self._status != TimerStatus.READY:
                raise InvalidStateTransition(
                    f"cannot start a session while {self._status.value}"
                )
            session = self._store.session_plan().build()

            self._session = session
            self._index = 0
            self._subject = subject
            self._store.set_subject(subject)
            self._set_status(TimerStatus.TIMING)
            self._save_position()
            self._ticker.start()
            logger.info(
                "Session started: subject=%s chunks=%d", subject, len(session),
            )

            self.chunk_changed.emit(self._session[0].snapshot())
            self.goals_changed.emit()

    def pause(self) -> None:
        with self._lock:
            if self._status != TimerStatus.TIMING:
                raise InvalidStateTransition(
                    f"cannot pause while {self._status.value}"
                )
            self._ticker.stop()
            self._set_status(TimerStatus.PAUSED)
            self._save_position()
            logger.info(
                "Session paused: chunk=%d elapsed=%ss",
                self._index, self._session[self._index].elapsed,
            )

    def resume(self) -> None:
        with self._lock:
            if self._status != TimerStatus.PAUSED:
                raise InvalidStateTransition(
                    f"cannot resume while {self._status.value}"
                )
            self._set_status(TimerStatus.TIMING)
            self._ticker.start()
            logger.info("Session resumed: chunk=%d", self._index)

    def skip(self) -> None:
        """Abandon the current chunk and move to the next one.

        From PAUSED the next chunk starts timing straight away.
        """
        with self._lock:
            if self._status == TimerStatus.READY:
                raise NoActiveChunk("nothing to skip")

            skipped = self._session[self._index]
            skipped.elapsed = 0
            self._index += 1
            logger.info("Chunk skipped: %s", skipped.type.value)

            if self._index >= len(self._session):
                self._finish()
                return

            if self._status == TimerStatus.PAUSED:
                self._set_status(TimerStatus.TIMING)
            self._save_position()
            self._ticker.start()
            self.chunk_changed.emit(self._session[self._index].snapshot())
            self.goals_changed.emit()

    def reset(self) -> None:
        """Discard the rest of the session and return to READY."""
        with self._lock:
            if self._status == TimerStatus.READY:
                raise InvalidStateTransition("no session to reset")
            logger.info("Session reset at chunk %d", self._index)
            self._finish()

    def refresh_settings(self) -> None:
        """Rebuild the preview session after a settings change."""
        with self._lock:
            if self._status != TimerStatus.READY:
                raise InvalidStateTransition(
                    f"cannot apply new settings while {self._status.value}"
                )
            self._session = self._store.session_plan().build()
            self._index = 0
            self.chunk_changed.emit(self._session[0].snapshot())
            self.goals_changed.emit()

    def rename_subject(self, old_name: str, new_name: str) -> None:
        """Follow a rename of the subject bound to the running session."""
        with self._lock:
            if self._subject != old_name:
                return
            self._subject = new_name
            self._store.set_subject(new_name)
            logger.info("Session subject renamed: %s -> %s", old_name, new_name)

    def tick(self) -> None:
        """Advance the current chunk by one second.

        Driven by the ticker.  Ticks arriving when not TIMING (a late
        timer callback after pause or reset) are ignored.
        """
        with self._lock:
            if self._status != TimerStatus.TIMING:
                logger.debug("Ignoring tick while %s", self._status.value)
                return

            chunk = self._session[self._index]
            chunk.elapsed = min(chunk.duration, chunk.elapsed + 1)
            if not chunk.is_finished:
                if chunk.elapsed % POSITION_SAVE_TICKS == 0:
                    self._save_position()
                self.chunk_changed.emit(chunk.snapshot())
                return

            self.chunk_completed.emit(chunk.snapshot())
            self._index += 1
            if self._index >= len(self._session):
                self._finish()
                return

            self._save_position()
            self.chunk_changed.emit(self._session[self._index].snapshot())
            self.goals_changed.emit()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _finish(self) -> None:
        self._ticker.stop()
        self._subject = None
        self._set_status(TimerStatus.READY)
        self._store.set_session_position(0, 0)
        self._build_preview()
        logger.info("Session finished")

        self.session_finished.emit()
        if self._session:
            self.chunk_changed.emit(self._session[0].snapshot())
        self.goals_changed.emit()

    def _build_preview(self) -> None:
        self._index = 0
        try:
            self._session = self._store.session_plan().build()
        except InvalidConfiguration as exc:
            logger.warning("Cannot build session from settings: %s", exc)
            self._session = []

    def _set_status(self, status: TimerStatus) -> None:
        self._status = status
        self._store.set_timer_status(status)
        self.status_changed.emit(status)

    def _save_position(self) -> None:
        chunk = self._session[self._index]
        self._store.set_session_position(self._index, chunk.elapsed)

    def _restore(self) -> None:
        """Pick up a session interrupted by a restart, paused."""
        status = self._store.get_timer_status()
        self._build_preview()
        if status == TimerStatus.READY:
            return

        index, elapsed = self._store.get_session_position()
        try:
            if not self._session or not 0 <= index < len(self._session):
                raise IndexError(index)
            chunk = self._session[index]
            chunk.elapsed = max(0, min(int(elapsed), chunk.duration - 1))
        except (IndexError, TypeError, ValueError):
            logger.warning(
                "Discarding interrupted session: position %r / %r invalid",
                index, elapsed,
            )
            self._store.set_timer_status(TimerStatus.READY)
            self._store.set_session_position(0, 0)
            return

        self._index = index
        self._subject = self._store.get_subject() or None
        self._status = TimerStatus.PAUSED
        self._store.set_timer_status(TimerStatus.PAUSED)
        logger.info(
            "Restored interrupted session: subject=%s chunk=%d elapsed=%ss",
            self._subject, index, chunk.elapsed,
        )
