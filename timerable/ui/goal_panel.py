"""Goal pane: a title, "current / total", and a thin progress bar."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QFrame, QLabel, QProgressBar, QVBoxLayout, QWidget

from ..timer.goals import GoalCounter


class GoalPanel(QFrame):
    def __init__(self, title: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("card")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 12, 16, 14)
        layout.setSpacing(6)

        self._title = QLabel(title, self)
        self._title.setObjectName("goalTitle")
        self._title.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._value = QLabel("0 / 0", self)
        self._value.setObjectName("goalValue")
        self._value.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._bar = QProgressBar(self)
        self._bar.setRange(0, 1000)
        self._bar.setTextVisible(False)

        layout.addWidget(self._title)
        layout.addWidget(self._value)
        layout.addWidget(self._bar)

    @property
    def value_text(self) -> str:
        return self._value.text()

    @property
    def bar_value(self) -> int:
        return self._bar.value()

    def show_goal(self, goal: GoalCounter) -> None:
        self._value.setText(str(goal))
        self._bar.setValue(round(goal.fraction * 1000))
        self.setAccessibleName(goal.title)
        self.setAccessibleDescription(str(goal))
