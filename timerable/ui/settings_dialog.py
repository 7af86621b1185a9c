"""Settings dialog for Timerable.

Durations are edited in minutes and stored in seconds.  Every change is
written through the settings store as soon as it is made; the window
asks the controller to pick the new values up once the dialog closes.
While a session is running the new session values only apply to the
next one.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QCheckBox, QDialog, QDialogButtonBox, QFormLayout, QGroupBox, QLabel,
    QSlider, QSpinBox, QVBoxLayout, QWidget,
)

from ..settings import SettingsStore

# (settings field, label, minimum, maximum, stored per unit)
_SESSION_FIELDS = (
    ("work_duration", "Work", 1, 120, 60),
    ("short_break_duration", "Short break", 1, 60, 60),
    ("long_break_duration", "Long break", 1, 120, 60),
    ("number_of_sessions", "Work sessions", 1, 12, 1),
    ("daily_goal", "Daily goal", 1, 48, 1),
)


class SettingsDialog(QDialog):
    def __init__(
        self,
        store: SettingsStore,
        parent: QWidget | None = None,
        *,
        session_locked: bool = False,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)
        self.setMinimumWidth(360)
        self._store = store
        self._spins: dict[str, QSpinBox] = {}

        layout = QVBoxLayout(self)
        layout.addWidget(self._session_group(session_locked))
        layout.addWidget(self._feedback_group())
        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Close, self)
        buttons.rejected.connect(self.accept)
        layout.addWidget(buttons)

    # ── sections ──────────────────────────────────────────────────────────

    def _session_group(self, locked: bool) -> QGroupBox:
        group = QGroupBox("Session", self)
        form = QFormLayout(group)
        settings = self._store.settings
        for name, label, low, high, unit in _SESSION_FIELDS:
            spin = QSpinBox(group)
            spin.setRange(low, high)
            if unit == 60:
                spin.setSuffix(" min")
            spin.setValue(getattr(settings, name) // unit)
            spin.valueChanged.connect(
                lambda value, n=name, u=unit: self._store.update(**{n: value * u})
            )
            form.addRow(f"{label}:", spin)
            self._spins[name] = spin
        if locked:
            note = QLabel("Changes apply from the next session.", group)
            note.setObjectName("subtitle")
            form.addRow(note)
        return group

    def _feedback_group(self) -> QGroupBox:
        group = QGroupBox("Feedback", self)
        form = QFormLayout(group)
        settings = self._store.settings

        self._sound_cb = QCheckBox("Play a sound when a chunk ends", group)
        self._sound_cb.setChecked(settings.sound_enabled)
        self._sound_cb.toggled.connect(
            lambda on: self._store.update(sound_enabled=on)
        )
        form.addRow(self._sound_cb)

        self._vol_slider = QSlider(Qt.Orientation.Horizontal, group)
        self._vol_slider.setRange(0, 100)
        self._vol_slider.setValue(settings.sound_volume)
        self._vol_slider.valueChanged.connect(
            lambda value: self._store.update(sound_volume=value)
        )
        form.addRow("Volume:", self._vol_slider)

        self._haptics_cb = QCheckBox("Alert the window when a chunk ends", group)
        self._haptics_cb.setChecked(settings.haptics_enabled)
        self._haptics_cb.toggled.connect(
            lambda on: self._store.update(haptics_enabled=on)
        )
        form.addRow(self._haptics_cb)
        return group

    def spin(self, name: str) -> QSpinBox:
        """The spin box editing settings field ``name``."""
        return self._spins[name]
