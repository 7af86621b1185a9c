"""Presentation-facing controller for the session engine.

The controller turns user input into engine transitions, turns engine
signals into a pure ``TimerViewState`` plus goal counters, and routes
end-of-chunk feedback to persistence and the notification service.

Platform specifics (the subject picker, "donating" what the user just
did to the OS, error alerts) sit behind the ``IntentPresenter``
protocol so none of this depends on a particular widget toolkit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol

from PyQt6.QtCore import QObject, pyqtSignal

from .audio.sounds import NotificationService
from .database.persistence import PersistenceService
from .settings import SettingsStore
from .timer.engine import SessionEngine
from .timer.errors import TimerError
from .timer.goals import GoalCounter, daily_goal, session_goal
from .timer.session import TimeChunk, TimerStatus

logger = logging.getLogger(__name__)

IDLE_TITLE = "Timer"


# ── intents ───────────────────────────────────────────────────────────────


class Intent(Enum):
    START_SESSION = "start_session"
    PAUSE = "pause"
    RESUME = "resume"
    SKIP = "skip"
    RESET = "reset"


@dataclass(frozen=True)
class IntentDonation:
    intent: Intent
    subject_name: str | None = None


class IntentPresenter(Protocol):
    def choose_subject(
        self,
        subject_names: list[str],
        on_chosen: Callable[[str], None],
        on_manage: Callable[[], None],
    ) -> None: ...

    def donate(self, donation: IntentDonation) -> None: ...

    def show_error(self, message: str) -> None: ...


# ── view state ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TimerViewState:
    title: str
    start_stop_title: str
    reset_visible: bool
    skip_enabled: bool
    session_shortcuts_enabled: bool


_START_STOP_TITLES: dict[TimerStatus, str] = {
    TimerStatus.READY: "Start",
    TimerStatus.TIMING: "Pause",
    TimerStatus.PAUSED: "Resume",
}


def derive_view_state(status: TimerStatus, subject: str | None) -> TimerViewState:
    in_session = status != TimerStatus.READY
    return TimerViewState(
        title=subject if in_session and subject else IDLE_TITLE,
        start_stop_title=_START_STOP_TITLES[status],
        reset_visible=in_session,
        skip_enabled=in_session,
        session_shortcuts_enabled=in_session,
    )


# ── controller ────────────────────────────────────────────────────────────


class TimerController(QObject):
    """Drives a ``SessionEngine`` on behalf of the timer screen.

    Signals
    -------
    view_state_changed(state: TimerViewState)
    goals_updated(session: GoalCounter, daily: GoalCounter)
    manage_subjects_requested()
    """

    view_state_changed = pyqtSignal(object)
    goals_updated = pyqtSignal(object, object)
    manage_subjects_requested = pyqtSignal()

    def __init__(
        self,
        engine: SessionEngine,
        store: SettingsStore,
        persistence: PersistenceService,
        notifications: NotificationService,
        presenter: IntentPresenter,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._store = store
        self._persistence = persistence
        self._notifications = notifications
        self._presenter = presenter

        engine.status_changed.connect(self._publish_view_state)
        engine.chunk_completed.connect(self._on_chunk_completed)
        engine.goals_changed.connect(self.refresh_goals)

    # ── queries ───────────────────────────────────────────────────────

    @property
    def engine(self) -> SessionEngine:
        return self._engine

    @property
    def view_state(self) -> TimerViewState:
        return derive_view_state(self._engine.status, self._engine.subject)

    def goals(self) -> tuple[GoalCounter, GoalCounter]:
        return (
            session_goal(self._engine),
            daily_goal(self._persistence, self._store),
        )

    # ── user actions ──────────────────────────────────────────────────

    def start_stop(self) -> None:
        """The single start / pause / resume button."""
        status = self._engine.status
        if status == TimerStatus.READY:
            names = [s.name for s in self._persistence.fetch_all_subjects()]
            self._presenter.choose_subject(
                names, self.start_session, self.manage_subjects,
            )
        elif status == TimerStatus.TIMING:
            if self._run(self._engine.pause):
                self._presenter.donate(IntentDonation(Intent.PAUSE))
        else:
            if self._run(self._engine.resume):
                self._presenter.donate(IntentDonation(Intent.RESUME))

    def start_session(self, subject_name: str) -> None:
        if self._run(self._engine.start_session, subject_name):
            self._presenter.donate(
                IntentDonation(Intent.START_SESSION, subject_name),
            )

    def skip(self) -> None:
        if self._run(self._engine.skip):
            self._presenter.donate(IntentDonation(Intent.SKIP))

    def reset(self) -> None:
        if self._run(self._engine.reset):
            self._presenter.donate(IntentDonation(Intent.RESET))

    def manage_subjects(self) -> None:
        self.manage_subjects_requested.emit()

    def on_subject_renamed(self, old_name: str, new_name: str) -> None:
        """Keep a running session bound to its subject across a rename."""
        self._engine.rename_subject(old_name, new_name)
        self._publish_view_state()

    def reopen_subject_picker(self) -> None:
        """Called when subject management closes; back to the picker."""
        if self._engine.status == TimerStatus.READY:
            self.start_stop()

    def on_appear(self) -> None:
        """Pick up new settings (when idle) and redraw everything."""
        if self._engine.status == TimerStatus.READY:
            self._run(self._engine.refresh_settings)
        self._publish_view_state()
        self.refresh_goals()

    def refresh_goals(self) -> None:
        session, daily = self.goals()
        self.goals_updated.emit(session, daily)

    # ── engine events ─────────────────────────────────────────────────

    def _on_chunk_completed(self, chunk: TimeChunk) -> None:
        self._persistence.record_chunk(chunk, self._engine.subject)
        self._notifications.play_notification_sound(chunk.type)
        self._notifications.play_haptic_feedback()

    def _publish_view_state(self, *_args) -> None:
        self.view_state_changed.emit(self.view_state)

    # ── helpers ───────────────────────────────────────────────────────

    def _run(self, action: Callable[..., None], *args) -> bool:
        try:
            action(*args)
        except TimerError as exc:
            logger.warning("%s refused: %s", action.__name__, exc)
            self._presenter.show_error(str(exc))
            return False
        return True
