"""
Database bootstrapping: table creation for local runs and default settings.
Production schemas are managed with migrations.
"""

from sqlalchemy import select

from app.db.base import Base
from app.db import session as db_session
from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SETTINGS = {
    "quotePrefix": settings.DEFAULT_QUOTE_PREFIX,
    "invoicePrefix": settings.DEFAULT_INVOICE_PREFIX,
}


async def create_tables() -> None:
    """Create all database tables registered on Base."""
    import app.models  # noqa: F401  registers every model with Base

    async with db_session.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database tables initialized")


async def seed_initial_data() -> None:
    """Insert the numbering prefix settings when they are missing."""
    from app.models.setting import Setting

    async with db_session.async_session_maker() as session:
        existing = await session.execute(select(Setting.key))
        present = set(existing.scalars().all())
        for key, value in DEFAULT_SETTINGS.items():
            if key not in present:
                session.add(Setting(key=key, value=value))
        await session.commit()

    logger.info("Initial settings seeded", extra={"keys": list(DEFAULT_SETTINGS)})
