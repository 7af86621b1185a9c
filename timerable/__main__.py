"""Allow running Timerable as a module: python -m timerable."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .database.db import init_db
from .app import TimerWindow


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    return logging.getLogger("timerable")


def main() -> None:
    logger = setup_logging()
    init_db()
    logger.info("Timerable ready")

    app = QApplication(sys.argv)
    app.setApplicationName("Timerable")
    app.setOrganizationName("Timerable")

    window = TimerWindow()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
