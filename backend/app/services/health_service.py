"""
Health service.
Reports uptime and database reachability.
"""

import logging
import time

from sqlalchemy.exc import SQLAlchemyError

from app.db import session as db_session
from app.db.repositories.health_repository import HealthRepository
from app.core.config import settings
from app.schemas.health import HealthResponse
from app.services.base_service import BaseService

logger = logging.getLogger(__name__)


class HealthService(BaseService):
    """Service for health check operations."""

    def __init__(self):
        self.start_time = time.time()

    async def get_health(self) -> HealthResponse:
        """
        Get system health status.

        Returns:
            HealthResponse with status, uptime (ISO 8601 duration) and checks
        """
        uptime_seconds = int(time.time() - self.start_time)
        checks = {"database": await self._check_database()}
        status = "ok" if all(check == "ok" for check in checks.values()) else "degraded"

        return HealthResponse(
            status=status,
            version=settings.VERSION,
            uptime=f"PT{uptime_seconds}S",
            checks=checks,
        )

    async def _check_database(self) -> str:
        if db_session.async_session_maker is None:
            db_session.create_sessionmaker()
        try:
            async with db_session.async_session_maker() as session:
                ok = await HealthRepository(session=session).check_database()
        except (SQLAlchemyError, OSError) as e:
            logger.warning(f"Database health check failed: {e}")
            return f"error: {e}"
        return "ok" if ok else "error"
