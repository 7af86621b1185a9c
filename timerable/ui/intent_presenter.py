"""Qt implementation of the controller's intent presenter."""

from __future__ import annotations

import logging
from typing import Callable

from PyQt6.QtGui import QCursor
from PyQt6.QtWidgets import QMainWindow, QMenu, QMessageBox

from ..controller import Intent, IntentDonation

logger = logging.getLogger(__name__)

DONATION_MESSAGES: dict[Intent, str] = {
    Intent.START_SESSION: "Started {subject}",
    Intent.PAUSE: "Session paused",
    Intent.RESUME: "Session resumed",
    Intent.SKIP: "Skipped to the next chunk",
    Intent.RESET: "Session reset",
}


class QtIntentPresenter:
    """Subject picker as a popup menu; donations go to the status bar."""

    def __init__(self, window: QMainWindow) -> None:
        self._window = window
        self._menu: QMenu | None = None

    def build_subject_menu(
        self,
        subject_names: list[str],
        on_chosen: Callable[[str], None],
        on_manage: Callable[[], None],
    ) -> QMenu:
        menu = QMenu("Select Subject for Session", self._window)
        for name in subject_names:
            action = menu.addAction(name)
            action.triggered.connect(lambda _checked=False, n=name: on_chosen(n))
        if subject_names:
            menu.addSeparator()
        manage = menu.addAction("Edit Subjects" if subject_names else "Add Subject")
        manage.triggered.connect(lambda _checked=False: on_manage())
        menu.addAction("Close")
        return menu

    def choose_subject(
        self,
        subject_names: list[str],
        on_chosen: Callable[[str], None],
        on_manage: Callable[[], None],
    ) -> None:
        self._menu = self.build_subject_menu(subject_names, on_chosen, on_manage)
        self._menu.popup(QCursor.pos())

    def donate(self, donation: IntentDonation) -> None:
        message = DONATION_MESSAGES[donation.intent].format(
            subject=donation.subject_name or "",
        )
        logger.debug("Intent donated: %s", donation)
        self._window.statusBar().showMessage(message, 4000)

    def show_error(self, message: str) -> None:
        QMessageBox.warning(self._window, "Timer", message)
