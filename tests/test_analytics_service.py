"""
Dashboard and analytics aggregation tests.
"""

from decimal import Decimal

from app.models.quote import QuoteStatus
from app.schemas.quote import QuoteUpdate
from app.services.analytics_service import AnalyticsService, conversion_rate, month_key
from app.services.conversion_service import ConversionService
from app.services.quote_service import QuoteService
from app.utils.dates import add_months, utcnow


async def _seed_quotes(session, make_quote):
    """One draft (250), one approved (200), one invoiced (250)."""
    draft = await make_quote()
    approved = await make_quote(discount=Decimal("50"))
    invoiced = await make_quote()
    quote_service = QuoteService(session)
    await quote_service.update_quote(approved.id, QuoteUpdate(status=QuoteStatus.SENT))
    await quote_service.update_quote(approved.id, QuoteUpdate(status=QuoteStatus.APPROVED))
    await ConversionService(session).convert_to_invoice(invoiced.id)
    return draft, approved, invoiced


def test_conversion_rate_formatting():
    assert conversion_rate(0, 0) == "0.0"
    assert conversion_rate(2, 3) == "66.7"
    assert conversion_rate(3, 3) == "100.0"


async def test_dashboard(test_db_session, make_quote):
    await _seed_quotes(test_db_session, make_quote)
    now = utcnow()

    dashboard = await AnalyticsService(test_db_session).get_dashboard(now=now)

    assert dashboard.total_quotes == 3
    assert dashboard.total_clients == 1
    assert dashboard.total_revenue == "450.00"
    assert dashboard.conversion_rate == "66.7"
    assert len(dashboard.recent_quotes) == 3
    assert dashboard.recent_quotes[0].client_name == "Acme Corp"
    assert {entry.status: entry.count for entry in dashboard.quotes_by_status} == {
        QuoteStatus.DRAFT: 1,
        QuoteStatus.APPROVED: 1,
        QuoteStatus.INVOICED: 1,
    }
    assert len(dashboard.monthly_revenue) == 6
    assert dashboard.monthly_revenue[-1].month == month_key(now)
    assert dashboard.monthly_revenue[-1].revenue == "450.00"
    assert all(entry.revenue == "0.00" for entry in dashboard.monthly_revenue[:-1])


async def test_empty_dashboard(test_db_session):
    dashboard = await AnalyticsService(test_db_session).get_dashboard()

    assert dashboard.total_quotes == 0
    assert dashboard.total_revenue == "0.00"
    assert dashboard.conversion_rate == "0.0"
    assert dashboard.recent_quotes == []


async def test_analytics(test_db_session, make_quote):
    await _seed_quotes(test_db_session, make_quote)

    analytics = await AnalyticsService(test_db_session).get_analytics()

    assert analytics.overview.total_quotes == 3
    assert analytics.overview.total_revenue == "450.00"
    assert analytics.overview.avg_quote_value == "233.33"
    assert analytics.overview.conversion_rate == "66.7"
    assert len(analytics.monthly_data) == 12
    current = analytics.monthly_data[-1]
    assert (current.quotes, current.revenue, current.conversions) == (3, "450.00", 2)
    assert [(c.name, c.total_revenue, c.quote_count) for c in analytics.top_clients] == [("Acme Corp", "450.00", 2)]
    breakdown = {entry.status: (entry.count, entry.value) for entry in analytics.status_breakdown}
    assert breakdown[QuoteStatus.APPROVED] == (1, "200.00")
    assert breakdown[QuoteStatus.DRAFT] == (1, "250.00")


async def test_analytics_time_range_excludes_older_quotes(test_db_session, make_quote):
    await _seed_quotes(test_db_session, make_quote)

    analytics = await AnalyticsService(test_db_session).get_analytics(
        time_range_months=1, now=add_months(utcnow(), 2)
    )

    assert analytics.overview.total_quotes == 0
    assert analytics.overview.avg_quote_value == "0.00"
    assert analytics.top_clients == []
