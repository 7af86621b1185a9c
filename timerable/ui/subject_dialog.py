"""Subject management dialog.

Lists every subject with its total completed focus time underneath and
lets the user add, rename, and delete subjects.  Validation errors from
the persistence layer are shown inline.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QDialog, QHBoxLayout, QInputDialog, QLabel, QLineEdit, QListWidget,
    QListWidgetItem, QPushButton, QVBoxLayout, QWidget,
)

from ..database.persistence import PersistenceService


def format_focus_time(seconds: int) -> str:
    """'1h 05m', '25m', or '0m'."""
    hours, rem = divmod(max(0, seconds), 3600)
    minutes = rem // 60
    if hours:
        return f"{hours}h {minutes:02d}m"
    return f"{minutes}m"


class SubjectDialog(QDialog):
    """Modal subject list editor."""

    subjects_changed = pyqtSignal()
    subject_renamed = pyqtSignal(str, str)

    def __init__(
        self,
        persistence: PersistenceService,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Subjects")
        self.setMinimumWidth(360)
        self.setModal(True)
        self._persistence = persistence
        self._build_ui()
        self.refresh()

    # ── build ─────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(20, 16, 20, 16)
        root.setSpacing(10)

        self._list = QListWidget(self)
        root.addWidget(self._list)

        self._empty_label = QLabel("No subjects yet. Add one to start a session.", self)
        self._empty_label.setObjectName("subtitle")
        self._empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self._empty_label)

        add_row = QHBoxLayout()
        self._name_input = QLineEdit(self)
        self._name_input.setPlaceholderText("New subject")
        self._name_input.setMaxLength(100)
        self._name_input.returnPressed.connect(self._on_add)
        add_btn = QPushButton("Add", self)
        add_btn.setObjectName("secondaryButton")
        add_btn.clicked.connect(self._on_add)
        add_row.addWidget(self._name_input)
        add_row.addWidget(add_btn)
        root.addLayout(add_row)

        self._error_label = QLabel("", self)
        self._error_label.setObjectName("subtitle")
        root.addWidget(self._error_label)

        btn_row = QHBoxLayout()
        rename_btn = QPushButton("Rename", self)
        rename_btn.setObjectName("secondaryButton")
        rename_btn.clicked.connect(self._on_rename)
        delete_btn = QPushButton("Delete", self)
        delete_btn.setObjectName("secondaryButton")
        delete_btn.clicked.connect(self._on_delete)
        close_btn = QPushButton("Close", self)
        close_btn.setObjectName("secondaryButton")
        close_btn.clicked.connect(self.accept)
        btn_row.addWidget(rename_btn)
        btn_row.addWidget(delete_btn)
        btn_row.addStretch()
        btn_row.addWidget(close_btn)
        root.addLayout(btn_row)

    # ── data ──────────────────────────────────────────────────────────

    def refresh(self) -> None:
        self._list.clear()
        totals = self._persistence.fetch_subject_totals()
        for name, seconds in totals:
            item = QListWidgetItem(f"{name}\n{format_focus_time(seconds)}")
            item.setData(Qt.ItemDataRole.UserRole, name)
            self._list.addItem(item)
        self._empty_label.setVisible(not totals)

    def subject_names(self) -> list[str]:
        return [
            self._list.item(i).data(Qt.ItemDataRole.UserRole)
            for i in range(self._list.count())
        ]

    def add_subject(self, name: str) -> bool:
        try:
            self._persistence.add_subject(name)
        except ValueError as exc:
            self._error_label.setText(str(exc))
            return False
        self._after_change()
        return True

    def rename_subject(self, old_name: str, new_name: str) -> bool:
        try:
            subject = self._persistence.rename_subject(old_name, new_name)
        except (ValueError, LookupError) as exc:
            self._error_label.setText(str(exc))
            return False
        self.subject_renamed.emit(old_name, subject.name)
        self._after_change()
        return True

    def delete_subject(self, name: str) -> bool:
        try:
            self._persistence.delete_subject(name)
        except LookupError as exc:
            self._error_label.setText(str(exc))
            return False
        self._after_change()
        return True

    # ── slots ─────────────────────────────────────────────────────────

    def _selected_name(self) -> str | None:
        item = self._list.currentItem()
        return item.data(Qt.ItemDataRole.UserRole) if item else None

    def _on_add(self) -> None:
        if self.add_subject(self._name_input.text()):
            self._name_input.clear()

    def _on_rename(self) -> None:
        old_name = self._selected_name()
        if old_name is None:
            return
        new_name, ok = QInputDialog.getText(
            self, "Rename Subject", "Name:", text=old_name,
        )
        if ok:
            self.rename_subject(old_name, new_name)

    def _on_delete(self) -> None:
        name = self._selected_name()
        if name is not None:
            self.delete_subject(name)

    def _after_change(self) -> None:
        self._error_label.setText("")
        self.refresh()
        self.subjects_changed.emit()
