"""
Mark unpaid invoices past their due date as overdue.
Meant to be run by a scheduler (cron, k8s CronJob).
Run with: python refresh_overdue_invoices.py
"""
import asyncio
import logging

from app.core.logging import setup_logging
from app.db.session import close_db, create_sessionmaker, init_db
from app.services.payment_service import PaymentService

logger = logging.getLogger(__name__)


async def refresh_overdue_invoices() -> int:
    """Run one overdue sweep and return the number of invoices changed."""
    await init_db()
    async_session_maker = create_sessionmaker()

    try:
        async with async_session_maker() as session:
            updated = await PaymentService(session).refresh_overdue_invoices()
    finally:
        await close_db()

    print(f"Invoices marked overdue: {updated}")
    return updated


if __name__ == "__main__":
    setup_logging()
    asyncio.run(refresh_overdue_invoices())
