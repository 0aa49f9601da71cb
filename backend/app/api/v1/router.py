"""
API v1 router that aggregates all endpoint routers.
All routes require authentication except health.
"""

from fastapi import APIRouter, Depends
from app.api.v1.middleware import require_admin, require_authentication

from app.api.v1.endpoints import (
    health,
    auth,
    clients,
    quotes,
    invoices,
    payments,
    settings,
    analytics,
    activity_logs,
    users,
)

api_router = APIRouter()

# Public routes (no authentication required)
api_router.include_router(health.router, tags=["health"])

# Protected routes (authentication required for all endpoints)
# Authentication is enforced via dependency injection at the router level
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["authentication"],
    dependencies=[Depends(require_authentication)],
)
api_router.include_router(
    clients.router,
    prefix="/clients",
    tags=["clients"],
    dependencies=[Depends(require_authentication)],
)
api_router.include_router(
    quotes.router,
    prefix="/quotes",
    tags=["quotes"],
    dependencies=[Depends(require_authentication)],
)
api_router.include_router(
    invoices.router,
    prefix="/invoices",
    tags=["invoices"],
    dependencies=[Depends(require_authentication)],
)
api_router.include_router(
    payments.router,
    prefix="/payments",
    tags=["payments"],
    dependencies=[Depends(require_authentication)],
)
api_router.include_router(
    settings.router,
    prefix="/settings",
    tags=["settings"],
    dependencies=[Depends(require_authentication)],
)
api_router.include_router(
    analytics.router,
    prefix="/analytics",
    tags=["analytics"],
    dependencies=[Depends(require_authentication)],
)
api_router.include_router(
    activity_logs.router,
    prefix="/activity-logs",
    tags=["activity-logs"],
    dependencies=[Depends(require_authentication)],
)
api_router.include_router(
    users.router,
    prefix="/users",
    tags=["users"],
    dependencies=[Depends(require_admin)],
)
