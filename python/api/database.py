"""
Database Connection Module

Owns the process-wide SQLAlchemy engine and picks the ledger store the
handlers use.
"""

import logging
import threading

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from ..ledger import Base, FixtureLedgerStore, LedgerStore, SqlLedgerStore
from .config import DATA_MODE_FIXTURE, Settings, settings

logger = logging.getLogger(__name__)

_engine: Engine | None = None
_engine_lock = threading.Lock()


def get_engine(database_url: str | None = None) -> Engine:
    """Get the shared engine, creating it on first use.

    Args:
        database_url: Override for settings.database_url (first call only)

    Returns:
        SQLAlchemy engine
    """
    global _engine

    if _engine is None:
        with _engine_lock:
            if _engine is None:
                url = database_url or settings.database_url
                options = {"pool_pre_ping": True}
                if not url.startswith("sqlite"):
                    options.update(pool_size=5, max_overflow=10)
                _engine = create_engine(url, **options)
                logger.info(f"Created database engine for {_engine.url.render_as_string(hide_password=True)}")

    return _engine


def dispose_engine() -> None:
    """Close all pooled connections and forget the shared engine."""
    global _engine

    with _engine_lock:
        if _engine is not None:
            _engine.dispose()
            logger.info("Disposed database engine")
            _engine = None


def make_session_factory(engine: Engine) -> sessionmaker:
    # Stores hand ORM records back after their session has closed
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create ledger tables that do not exist yet."""
    Base.metadata.create_all(bind=engine)


def build_store(config: Settings = settings) -> LedgerStore:
    """Create the ledger store selected by configuration.

    Args:
        config: Settings to read the data mode from

    Returns:
        FixtureLedgerStore when no database is configured, else SqlLedgerStore
    """
    if config.data_mode == DATA_MODE_FIXTURE:
        logger.warning("No database configured, serving fixture ledger data")
        return FixtureLedgerStore()

    engine = get_engine(config.database_url)
    if config.create_tables:
        try:
            init_db(engine)
        except SQLAlchemyError as e:
            # Requests still reach the store and fail or degrade one by one
            logger.warning(f"Could not create ledger tables, database unavailable: {e}")

    return SqlLedgerStore(
        make_session_factory(engine),
        bill_number_attempts=config.bill_number_attempts,
    )


def get_store(request: Request) -> LedgerStore:
    """Get the ledger store for FastAPI dependency injection.

    Returns the store chosen at startup, building it if startup did not run.
    """
    store = getattr(request.app.state, "store", None)
    if store is None:
        store = build_store()
        request.app.state.store = store
    return store
