"""Shared pytest fixtures for Timerable tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from timerable.database.db import configure_engine, init_db
from timerable.database.persistence import PersistenceService
from timerable.settings import Settings, SettingsStore
from timerable.timer.engine import SessionEngine


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def store(tmp_path):
    """Settings store on a temp file: 4 sessions of 1500 / 300 / 900 s."""
    return SettingsStore(Settings(), path=tmp_path / "settings.json")


@pytest.fixture
def short_store(tmp_path):
    """Two work sessions with tiny chunks so tests can tick through them."""
    settings = Settings(
        number_of_sessions=2,
        work_duration=3,
        short_break_duration=2,
        long_break_duration=4,
        daily_goal=3,
    )
    return SettingsStore(settings, path=tmp_path / "settings.json")


@pytest.fixture
def engine(qapp, store):
    """Fresh SessionEngine with default settings."""
    return SessionEngine(store)


@pytest.fixture
def short_engine(qapp, short_store):
    """SessionEngine whose chunks finish in a handful of ticks."""
    return SessionEngine(short_store)


@pytest.fixture
def persistence():
    return PersistenceService()
