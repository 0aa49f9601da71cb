"""
Database models.
Import all models here to ensure they're registered with Base.
"""

from app.models.user import User
from app.models.client import Client
from app.models.quote import Quote, QuoteItem
from app.models.invoice import Invoice, PaymentHistory
from app.models.setting import Setting
from app.models.document_sequence import DocumentSequence
from app.models.activity_log import ActivityLog

__all__ = [
    "User",
    "Client",
    "Quote",
    "QuoteItem",
    "Invoice",
    "PaymentHistory",
    "Setting",
    "DocumentSequence",
    "ActivityLog",
]
