"""
Analytics service: dashboard summary and revenue analytics over quotes.
Revenue counts quotes that were approved or invoiced.
"""

from collections import OrderedDict
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repositories.client_repository import ClientRepository
from app.db.repositories.quote_repository import QuoteRepository
from app.models.quote import Quote, QuoteStatus
from app.schemas.analytics import (
    AnalyticsOverview,
    AnalyticsResponse,
    DashboardResponse,
    MonthlyData,
    MonthlyRevenue,
    RecentQuote,
    StatusBreakdown,
    StatusCount,
    TopClient,
)
from app.services.base_service import BaseService
from app.utils.dates import add_months, utcnow
from app.utils.money import ZERO, format_money, to_money

REVENUE_STATUSES = (QuoteStatus.APPROVED, QuoteStatus.INVOICED)
DASHBOARD_MONTHS = 6
RECENT_QUOTES = 5
TOP_CLIENTS = 10


def is_revenue(quote: Quote) -> bool:
    return quote.status in REVENUE_STATUSES


def sum_totals(quotes: Iterable[Quote]) -> Decimal:
    return sum((to_money(quote.total) for quote in quotes), ZERO)


def conversion_rate(converted: int, total: int) -> str:
    """Percentage with one decimal, "0.0" when there is nothing to convert."""
    if not total:
        return "0.0"
    rate = Decimal(converted * 100) / Decimal(total)
    return f"{rate.quantize(Decimal('0.1'))}"


def month_key(moment: datetime) -> str:
    return moment.strftime("%b %Y")


def month_buckets(now: datetime, months: int) -> "OrderedDict[str, List[Quote]]":
    """Empty buckets for the ``months`` calendar months ending with ``now``, oldest first."""
    buckets: "OrderedDict[str, List[Quote]]" = OrderedDict()
    for offset in range(months - 1, -1, -1):
        buckets[month_key(add_months(now, -offset))] = []
    return buckets


class AnalyticsService(BaseService):
    """Service for dashboard and analytics aggregates."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.quote_repo = QuoteRepository(session)
        self.client_repo = ClientRepository(session)

    async def get_dashboard(self, now: Optional[datetime] = None) -> DashboardResponse:
        """Headline counts, recent quotes and the last six months of revenue."""
        now = now or utcnow()
        quotes = await self.quote_repo.list_all()
        total_clients = await self.client_repo.count()

        revenue_quotes = [quote for quote in quotes if is_revenue(quote)]

        status_counts: Dict[QuoteStatus, int] = OrderedDict()
        for quote in quotes:
            status_counts[quote.status] = status_counts.get(quote.status, 0) + 1

        buckets = month_buckets(now, DASHBOARD_MONTHS)
        for quote in revenue_quotes:
            key = month_key(quote.created_at)
            if key in buckets:
                buckets[key].append(quote)

        return DashboardResponse(
            total_quotes=len(quotes),
            total_clients=total_clients,
            total_revenue=format_money(sum_totals(revenue_quotes)),
            conversion_rate=conversion_rate(len(revenue_quotes), len(quotes)),
            recent_quotes=[
                RecentQuote(
                    id=quote.id,
                    quote_number=quote.quote_number,
                    client_name=quote.client.name if quote.client else "Unknown",
                    total=format_money(quote.total),
                    status=quote.status,
                    created_at=quote.created_at,
                )
                for quote in quotes[:RECENT_QUOTES]
            ],
            quotes_by_status=[
                StatusCount(status=status, count=count) for status, count in status_counts.items()
            ],
            monthly_revenue=[
                MonthlyRevenue(month=month, revenue=format_money(sum_totals(month_quotes)))
                for month, month_quotes in buckets.items()
            ],
        )

    async def get_analytics(self, time_range_months: int = 12, now: Optional[datetime] = None) -> AnalyticsResponse:
        """
        Analytics over quotes created in the last ``time_range_months``
        calendar months, the current month included.
        """
        now = now or utcnow()
        cutoff = add_months(now, -(time_range_months - 1))
        quotes = [quote for quote in await self.quote_repo.list_all() if quote.created_at >= cutoff]
        revenue_quotes = [quote for quote in quotes if is_revenue(quote)]

        avg_quote_value = sum_totals(quotes) / len(quotes) if quotes else ZERO

        buckets = month_buckets(now, time_range_months)
        for quote in quotes:
            key = month_key(quote.created_at)
            if key in buckets:
                buckets[key].append(quote)
        monthly_data = []
        for month, month_quotes in buckets.items():
            converted = [quote for quote in month_quotes if is_revenue(quote)]
            monthly_data.append(MonthlyData(
                month=month,
                quotes=len(month_quotes),
                revenue=format_money(sum_totals(converted)),
                conversions=len(converted),
            ))

        by_client: Dict[UUID, dict] = {}
        for quote in revenue_quotes:
            if quote.client is None:
                continue
            entry = by_client.setdefault(
                quote.client_id, {"name": quote.client.name, "revenue": ZERO, "count": 0}
            )
            entry["revenue"] += to_money(quote.total)
            entry["count"] += 1
        top_clients = sorted(by_client.values(), key=lambda entry: entry["revenue"], reverse=True)[:TOP_CLIENTS]

        breakdown: Dict[QuoteStatus, dict] = OrderedDict()
        for quote in quotes:
            entry = breakdown.setdefault(quote.status, {"count": 0, "value": ZERO})
            entry["count"] += 1
            entry["value"] += to_money(quote.total)

        return AnalyticsResponse(
            overview=AnalyticsOverview(
                total_quotes=len(quotes),
                total_revenue=format_money(sum_totals(revenue_quotes)),
                avg_quote_value=format_money(avg_quote_value),
                conversion_rate=conversion_rate(len(revenue_quotes), len(quotes)),
            ),
            monthly_data=monthly_data,
            top_clients=[
                TopClient(name=entry["name"], total_revenue=format_money(entry["revenue"]), quote_count=entry["count"])
                for entry in top_clients
            ],
            status_breakdown=[
                StatusBreakdown(status=status, count=entry["count"], value=format_money(entry["value"]))
                for status, entry in breakdown.items()
            ],
        )
