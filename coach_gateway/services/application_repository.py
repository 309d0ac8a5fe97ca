"""
Application Repository - read-only lookup of one tracked application.

The tracker owns the applications table; the chat gateway only ever reads a
single row by id. No ownership check is made here: any caller holding a
valid id gets the record.
"""
import logging

from sqlalchemy.exc import DataError
from sqlalchemy.orm import sessionmaker

from coach_gateway.core.errors import NotFoundError
from coach_gateway.db.postgres import execute_raw_sql, get_session_factory
from coach_gateway.schemas.schemas import ApplicationRecord

logger = logging.getLogger("coach_gateway.services.application_repository")


class ApplicationRepository:

    def __init__(self, session_factory: sessionmaker = None):
        self._session_factory = session_factory

    def get_application(self, job_id: str) -> ApplicationRecord:
        try:
            rows = execute_raw_sql(
                "SELECT * FROM applications WHERE id = :id",
                {"id": job_id},
                session_factory=self._session_factory or get_session_factory(),
            )
        except DataError as e:
            # e.g. "abc" against an integer key: it cannot resolve to a row
            logger.warning("Application id rejected by database | id=%r err=%s", job_id, e.orig)
            raise NotFoundError(f"Application {job_id!r} is not a valid id") from e

        if not rows:
            raise NotFoundError(f"Application {job_id!r} not found")
        return ApplicationRecord.from_row(rows[0])


def get_application_repository() -> ApplicationRepository:
    """FastAPI dependency."""
    return ApplicationRepository()
