"""
Database module - PostgreSQL connection (read-only use by the gateway).
"""
from coach_gateway.db.postgres import get_db_session, get_session_factory, test_postgres_connection

__all__ = [
    "get_db_session",
    "get_session_factory",
    "test_postgres_connection",
]
