"""
Engine and session management for the ledger store.

One process-wide engine is configured from a URL.  SQLite (the default
store and the test store) runs on a single shared connection so that an
in-memory database outlives the session that created it; other backends
use SQLAlchemy's default pool with pre-ping.

Services never commit.  Callers wrap a unit of work in session_scope(),
which commits on success and rolls back on any exception, so a failed
create leaves no partial transaction behind.
"""

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ledger_kernel.logging_config import get_logger

logger = get_logger("db.engine")

_engine: Engine | None = None
_sessions: sessionmaker[Session] | None = None


def init_engine_from_url(database_url: str, echo: bool = False) -> Engine:
    """Create the engine for ``database_url``, replacing any previous one."""
    global _engine, _sessions

    reset_engine()
    backend = make_url(database_url).get_backend_name()
    if backend == "sqlite":
        _engine = create_engine(
            database_url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        _engine = create_engine(database_url, echo=echo, pool_pre_ping=True)

    _sessions = sessionmaker(bind=_engine, expire_on_commit=False)
    logger.info("engine_initialized", extra={"backend": backend})
    return _engine


def get_engine() -> Engine:
    if _engine is None:
        raise RuntimeError("No ledger engine; call init_engine_from_url() first")
    return _engine


def get_session() -> Session:
    if _sessions is None:
        raise RuntimeError("No ledger engine; call init_engine_from_url() first")
    return _sessions()


@contextmanager
def session_scope() -> Iterator[Session]:
    """
    Unit of work: commit on normal exit, roll back and re-raise otherwise.

    Usage:
        with session_scope() as session:
            TransactionLedger(session).create(day, lines)
    """
    session = get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        logger.warning("unit_of_work_rolled_back", exc_info=True)
        raise
    finally:
        session.close()


def create_tables() -> None:
    from ledger_kernel.db.base import Base
    import ledger_kernel.models  # noqa: F401  registers every table on Base.metadata

    Base.metadata.create_all(get_engine())


def drop_tables() -> None:
    from ledger_kernel.db.base import Base

    Base.metadata.drop_all(get_engine())


def reset_engine() -> None:
    """Dispose the current engine, if any, and forget it."""
    global _engine, _sessions

    if _engine is not None:
        _engine.dispose()
    _engine = None
    _sessions = None
