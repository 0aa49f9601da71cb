"""
Health check response schema.
"""

from pydantic import BaseModel
from typing import Dict


class HealthResponse(BaseModel):
    """Service status, version, uptime and per-dependency checks."""
    status: str
    version: str
    uptime: str
    checks: Dict[str, str] = {}
