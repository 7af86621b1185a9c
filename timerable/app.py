"""Main application window for Timerable."""

from __future__ import annotations

from pathlib import Path

from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import QMainWindow, QStatusBar, QToolBar, QWidget

from .audio.sounds import NotificationService
from .controller import TimerController, TimerViewState
from .database.persistence import PersistenceService
from .settings import SettingsStore
from .timer.engine import SessionEngine
from .timer.session import TimerStatus
from .ui.intent_presenter import QtIntentPresenter
from .ui.settings_dialog import SettingsDialog
from .ui.styles import build_stylesheet
from .ui.subject_dialog import SubjectDialog
from .ui.timer_widget import TimerWidget


class TimerWindow(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        store: SettingsStore | None = None,
        persistence: PersistenceService | None = None,
        *,
        sounds_dir: Path | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setMinimumSize(380, 600)

        # ── collaborators ─────────────────────────────────────────────
        self._store = store or SettingsStore.load()
        self._persistence = persistence or PersistenceService()
        settings = self._store.settings
        self.resize(settings.window_width, settings.window_height)

        self._engine = SessionEngine(self._store, self)
        self._notifications = NotificationService(
            self, sounds_dir=sounds_dir, window=self,
        )
        self._apply_feedback_settings()

        self._presenter = QtIntentPresenter(self)
        self._controller = TimerController(
            self._engine,
            self._store,
            self._persistence,
            self._notifications,
            self._presenter,
            parent=self,
        )

        self.setStyleSheet(build_stylesheet())

        # ── central widget ────────────────────────────────────────────
        self._timer_widget = TimerWidget(self._controller, self)
        self.setCentralWidget(self._timer_widget)

        self._status_bar = QStatusBar(self)
        self.setStatusBar(self._status_bar)

        # ── actions / shortcuts ───────────────────────────────────────
        self._build_actions()

        # ── wire signals ──────────────────────────────────────────────
        self._controller.view_state_changed.connect(self._apply_view_state)
        self._controller.manage_subjects_requested.connect(
            lambda: self._open_subjects(reopen_picker=True),
        )
        self._apply_view_state(self._controller.view_state)

    # ══════════════════════════════════════════════════════════════════
    #  ACTIONS
    # ══════════════════════════════════════════════════════════════════

    def _build_actions(self) -> None:
        self._pause_action = self._make_action(
            "Resume/Pause Session", "Space", self._controller.start_stop,
        )
        self._reset_action = self._make_action(
            "Reset Session", "Ctrl+R", self._controller.reset,
        )
        self._skip_action = self._make_action(
            "Skip Chunk", "Ctrl+S", self._controller.skip,
        )
        self._skip_action.setIconText("Skip")
        self._subjects_action = self._make_action(
            "Manage Subjects", "Ctrl+M",
            lambda: self._open_subjects(reopen_picker=False),
        )
        self._settings_action = self._make_action(
            "Settings", "Ctrl+,", self._open_settings,
        )

        menu = self.menuBar().addMenu("Timer")
        for action in (
            self._pause_action, self._reset_action, self._skip_action,
        ):
            menu.addAction(action)
        menu.addSeparator()
        menu.addAction(self._subjects_action)
        menu.addAction(self._settings_action)

        toolbar = QToolBar("Session", self)
        toolbar.setMovable(False)
        toolbar.addAction(self._skip_action)
        self.addToolBar(toolbar)

    def _make_action(self, text: str, shortcut: str, slot) -> QAction:
        action = QAction(text, self)
        action.setShortcut(QKeySequence(shortcut))
        action.triggered.connect(lambda _checked=False: slot())
        self.addAction(action)
        return action

    # ══════════════════════════════════════════════════════════════════
    #  VIEW STATE
    # ══════════════════════════════════════════════════════════════════

    def _apply_view_state(self, state: TimerViewState) -> None:
        self.setWindowTitle(state.title)
        self._skip_action.setEnabled(state.skip_enabled)
        self._pause_action.setEnabled(state.session_shortcuts_enabled)
        self._reset_action.setEnabled(state.session_shortcuts_enabled)

    def _apply_feedback_settings(self) -> None:
        s = self._store.settings
        self._notifications.set_volume(s.sound_volume)
        self._notifications.set_enabled(s.sound_enabled)
        self._notifications.set_haptics_enabled(s.haptics_enabled)

    # ══════════════════════════════════════════════════════════════════
    #  DIALOGS
    # ══════════════════════════════════════════════════════════════════

    def _open_subjects(self, *, reopen_picker: bool) -> None:
        dialog = SubjectDialog(self._persistence, self)
        dialog.subject_renamed.connect(self._controller.on_subject_renamed)
        dialog.exec()
        if reopen_picker:
            self._controller.reopen_subject_picker()

    def _open_settings(self) -> None:
        dialog = SettingsDialog(
            self._store, self,
            session_locked=self._engine.status != TimerStatus.READY,
        )
        dialog.exec()
        self._apply_feedback_settings()
        self._controller.on_appear()

    # ══════════════════════════════════════════════════════════════════
    #  ACCESSORS
    # ══════════════════════════════════════════════════════════════════

    @property
    def controller(self) -> TimerController:
        return self._controller

    @property
    def engine(self) -> SessionEngine:
        return self._engine

    @property
    def timer_widget(self) -> TimerWidget:
        return self._timer_widget

    @property
    def skip_action(self) -> QAction:
        return self._skip_action

    # ══════════════════════════════════════════════════════════════════
    #  EVENTS
    # ══════════════════════════════════════════════════════════════════

    def showEvent(self, event) -> None:  # type: ignore[override]
        super().showEvent(event)
        self._controller.on_appear()

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._store.update(
            window_width=self.width(), window_height=self.height(),
        )
        event.accept()
