"""
Database utilities and connection management.

WHAT: SQLite database holding the durable store snapshot
WHY: Snapshot must outlive the process between shutdown and startup
HOW: SQLAlchemy sync engine with WAL mode, session management
"""

from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine, text, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from .config import settings
from ..utils.logger import get_logger

logger = get_logger(__name__)

# Base for models
Base = declarative_base()


def create_db_engine(url: str) -> Engine:
    """
    Build an engine for the given URL.

    WHAT: Engine with WAL + foreign keys enabled on every SQLite connection
    WHY: Snapshot writes replace many rows in one transaction
    HOW: Create parent directory for file databases, attach connect listener
    """
    if url.startswith("sqlite:///") and not url.endswith(":memory:"):
        Path(url.replace("sqlite:///", "")).parent.mkdir(parents=True, exist_ok=True)

    db_engine = create_engine(
        url,
        connect_args={"check_same_thread": False} if url.startswith("sqlite") else {},
        echo=settings.DEBUG,
        future=True
    )

    if url.startswith("sqlite"):
        @event.listens_for(db_engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            """Enable WAL mode for better concurrency."""
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return db_engine


def create_session_factory(db_engine: Engine) -> sessionmaker:
    return sessionmaker(
        bind=db_engine,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False
    )


engine = create_db_engine(settings.DATABASE_URL)
SessionLocal = create_session_factory(engine)


@contextmanager
def get_db(session_factory: sessionmaker = None):
    """
    Context manager for database session.

    Usage:
        with get_db() as db:
            # use db session
            pass

    Yields:
        Session: SQLAlchemy session
    """
    session = (session_factory or SessionLocal)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def ping_database(db_engine: Engine = None) -> dict:
    """
    Check database connectivity.

    Returns:
        Dict with status and info
    """
    db_engine = db_engine or engine
    try:
        with db_engine.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
        return {
            "available": True,
            "url": str(db_engine.url),
            "error": None
        }
    except Exception as e:
        logger.error(f"Database ping failed: {e}")
        return {
            "available": False,
            "url": str(db_engine.url),
            "error": str(e)
        }


def init_db(db_engine: Engine = None):
    """Create snapshot tables if they do not exist."""
    # Register ORM models on Base.metadata
    from . import models  # noqa: F401

    db_engine = db_engine or engine
    Base.metadata.create_all(bind=db_engine)
    logger.info(f"Database initialized ({db_engine.url})")


def close_db(db_engine: Engine = None):
    """Close database connections."""
    (db_engine or engine).dispose()
    logger.info("Database connections closed")
