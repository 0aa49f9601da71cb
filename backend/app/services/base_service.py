"""
Base service class.
Services contain business logic, coordinate repositories and own the commit.
"""

from abc import ABC


class BaseService(ABC):
    """Base service class for all services."""
    pass
