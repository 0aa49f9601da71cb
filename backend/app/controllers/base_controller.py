"""
Base controller class.
Controllers coordinate services for one request (e.g. a business operation
plus its activity log entry) and return Pydantic schemas.
"""

from abc import ABC


class BaseController(ABC):
    """Base controller class for all controllers."""
    pass
