import logging
import time
from contextlib import contextmanager
from functools import lru_cache

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from coach_gateway.core.config import get_settings

logger = logging.getLogger("coach_gateway.db.postgres")


@lru_cache()
def get_engine() -> Engine:
    """
    Create the engine on first use so importing the app never opens a
    connection (or needs a reachable database).
    pool_size=5: maintain 5 connections ready
    max_overflow=10: allow 10 extra connections under load
    """
    settings = get_settings()
    return create_engine(
        settings.database_url,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        echo=settings.debug  # Log SQL queries in debug mode
    )


@lru_cache()
def get_session_factory() -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


@contextmanager
def get_db_session(session_factory: sessionmaker = None):
    """
    Context manager for database sessions.
    Usage:
        with get_db_session() as db:
            db.execute(text("SELECT * FROM applications"))
    """
    session = (session_factory or get_session_factory())()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def test_postgres_connection() -> bool:
    """
    Test if PostgreSQL is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        with get_db_session() as db:
            result = db.execute(text("SELECT 1 as test"))
            row = result.fetchone()
            return row[0] == 1
    except Exception as e:
        logger.warning("PostgreSQL connection failed: %s", e)
        return False


def execute_raw_sql(sql: str, params: dict = None, session_factory: sessionmaker = None) -> list:
    """
    Execute raw SQL and return results as list of dicts.
    """
    start = time.monotonic()
    with get_db_session(session_factory) as db:
        result = db.execute(text(sql), params or {})
        # Convert rows to dicts
        columns = list(result.keys())
        rows = [dict(zip(columns, row)) for row in result.fetchall()]
    logger.debug(
        "Executed query | duration_ms=%.1f rows=%s",
        (time.monotonic() - start) * 1000,
        len(rows),
    )
    return rows
