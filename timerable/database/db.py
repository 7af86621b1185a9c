"""SQLite engine and session scope for Timerable.

The engine is built on first use so importing the package never
touches the disk.  Tests call ``configure_engine`` with an in-memory
URL before ``init_db``.
"""

from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from ..settings import APP_SUPPORT_DIR
from .models import Base

DB_PATH = APP_SUPPORT_DIR / "timerable.db"

_engine: Engine | None = None
_factory: sessionmaker | None = None


def _build(url: str) -> Engine:
    # connections are shared across threads
    return create_engine(url, connect_args={"check_same_thread": False})


def _current_engine() -> Engine:
    global _engine
    if _engine is None:
        DB_PATH.parent.mkdir(parents=True, exist_ok=True)
        _engine = _build(f"sqlite:///{DB_PATH}")
    return _engine


def configure_engine(url: str) -> None:
    """Use ``url`` instead of the on-disk database."""
    global _engine, _factory
    if _engine is not None:
        _engine.dispose()
    _engine = _build(url)
    _factory = None


def init_db() -> None:
    """Create any missing tables."""
    Base.metadata.create_all(_current_engine())


@contextmanager
def get_session():
    """Session that commits on a clean exit and rolls back on error."""
    global _factory
    if _factory is None:
        _factory = sessionmaker(bind=_current_engine(), expire_on_commit=False)
    session = _factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
