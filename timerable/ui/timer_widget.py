"""Main timer screen.

Layout (top → bottom):
    - ProgressRing (current chunk, time remaining)
    - Goal panes: this session / today
    - Start-Pause-Resume button and Reset (reset only during a session)

Everything shown here is derived from engine and controller signals;
the widget keeps no timer state of its own.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QHBoxLayout, QPushButton, QVBoxLayout, QWidget

from ..controller import TimerController, TimerViewState
from ..timer.errors import NoActiveChunk
from ..timer.goals import DAILY_GOAL_TITLE, SESSION_GOAL_TITLE, GoalCounter
from ..timer.session import TimeChunk
from .goal_panel import GoalPanel
from .progress_ring import ProgressRing


def format_remaining(seconds: int) -> str:
    minutes, seconds = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{seconds:02d}"


class TimerWidget(QWidget):
    """The timer card: ring, goals, and controls."""

    def __init__(self, controller: TimerController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._controller = controller
        self._engine = controller.engine
        self._build_ui()
        self._connect_signals()

        try:
            self._show_chunk(self._engine.current_chunk)
        except NoActiveChunk:
            self._ring.set_time_text("--:--")
        self._apply_view_state(controller.view_state)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(10, 10, 10, 10)
        root.setSpacing(10)

        ring_row = QHBoxLayout()
        ring_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._ring = ProgressRing(self)
        ring_row.addWidget(self._ring)
        root.addLayout(ring_row, stretch=1)

        goals_row = QHBoxLayout()
        goals_row.setSpacing(10)
        self._session_panel = GoalPanel(SESSION_GOAL_TITLE, self)
        self._daily_panel = GoalPanel(DAILY_GOAL_TITLE, self)
        goals_row.addWidget(self._session_panel)
        goals_row.addWidget(self._daily_panel)
        root.addLayout(goals_row)

        btn_row = QHBoxLayout()
        btn_row.setSpacing(10)
        self._start_stop_btn = QPushButton("Start", self)
        self._start_stop_btn.setObjectName("primaryButton")
        self._reset_btn = QPushButton("Reset", self)
        self._reset_btn.setObjectName("dangerButton")
        self._reset_btn.setVisible(False)
        btn_row.addWidget(self._start_stop_btn)
        btn_row.addWidget(self._reset_btn)
        root.addLayout(btn_row)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_stop_btn.clicked.connect(self._controller.start_stop)
        self._reset_btn.clicked.connect(self._controller.reset)

        self._engine.chunk_changed.connect(self._show_chunk)
        self._engine.chunk_completed.connect(self._on_chunk_completed)
        self._controller.view_state_changed.connect(self._apply_view_state)
        self._controller.goals_updated.connect(self._show_goals)

    # ── slots ─────────────────────────────────────────────────────────────

    def _show_chunk(self, chunk: TimeChunk) -> None:
        self._ring.set_time_text(format_remaining(chunk.remaining))
        self._ring.set_chunk_label(chunk.label)
        self._ring.set_percent(chunk.progress)
        self._ring.set_position_text(
            f"Chunk {self._engine.chunk_index + 1} of {len(self._engine.session)}"
        )
        self._ring.apply_state(self._engine.status, chunk.type)

    def _on_chunk_completed(self, chunk: TimeChunk) -> None:
        self._ring.trigger_celebration()

    def _apply_view_state(self, state: TimerViewState) -> None:
        self._start_stop_btn.setText(state.start_stop_title)
        self._reset_btn.setVisible(state.reset_visible)
        try:
            chunk = self._engine.current_chunk
        except NoActiveChunk:
            return
        self._ring.apply_state(self._engine.status, chunk.type)

    def _show_goals(self, session: GoalCounter, daily: GoalCounter) -> None:
        self._session_panel.show_goal(session)
        self._daily_panel.show_goal(daily)

    # ── accessors used by the window and tests ────────────────────────────

    @property
    def ring(self) -> ProgressRing:
        return self._ring

    @property
    def start_stop_button(self) -> QPushButton:
        return self._start_stop_btn

    @property
    def reset_button(self) -> QPushButton:
        return self._reset_btn

    @property
    def session_panel(self) -> GoalPanel:
        return self._session_panel

    @property
    def daily_panel(self) -> GoalPanel:
        return self._daily_panel
