"""
Analytics response schemas. Money fields are 2-dp strings.
"""

from pydantic import BaseModel
from typing import List
from datetime import datetime
from uuid import UUID

from app.models.quote import QuoteStatus


class RecentQuote(BaseModel):
    """Compact quote row for the dashboard."""
    id: UUID
    quote_number: str
    client_name: str
    total: str
    status: QuoteStatus
    created_at: datetime


class StatusCount(BaseModel):
    """Number of quotes in a status."""
    status: QuoteStatus
    count: int


class MonthlyRevenue(BaseModel):
    """Revenue booked in a month."""
    month: str
    revenue: str


class DashboardResponse(BaseModel):
    """Dashboard summary."""
    total_quotes: int
    total_clients: int
    total_revenue: str
    conversion_rate: str
    recent_quotes: List[RecentQuote]
    quotes_by_status: List[StatusCount]
    monthly_revenue: List[MonthlyRevenue]


class AnalyticsOverview(BaseModel):
    """Headline figures for a time range."""
    total_quotes: int
    total_revenue: str
    avg_quote_value: str
    conversion_rate: str


class MonthlyData(BaseModel):
    """Per-month activity."""
    month: str
    quotes: int
    revenue: str
    conversions: int


class TopClient(BaseModel):
    """Client ranked by revenue."""
    name: str
    total_revenue: str
    quote_count: int


class StatusBreakdown(BaseModel):
    """Count and value of quotes per status."""
    status: QuoteStatus
    count: int
    value: str


class AnalyticsResponse(BaseModel):
    """Analytics for a trailing window of months."""
    overview: AnalyticsOverview
    monthly_data: List[MonthlyData]
    top_clients: List[TopClient]
    status_breakdown: List[StatusBreakdown]
