"""
Quote and invoice PDF rendering.
"""

from decimal import Decimal
from uuid import uuid4

import pytest

from app.core.exceptions import NotFoundError
from app.schemas.payment import PaymentCreate
from app.schemas.quote import QuoteUpdate
from app.services.conversion_service import ConversionService
from app.services.payment_service import PaymentService
from app.services.pdf_service import PdfService, latin1, money
from app.services.quote_service import QuoteService
from app.services.setting_service import SettingService


def test_latin1_replaces_unsupported_characters():
    assert latin1("Café") == "Café"
    assert latin1("Chai ☕") == "Chai ?"
    assert latin1(None) == ""


def test_money_uses_two_decimals():
    assert money(Decimal("1234.5")) == "Rs. 1234.50"


async def test_render_quote(test_db_session, make_quote):
    quote = await make_quote(
        discount=Decimal("10"),
        cgst=Decimal("9"),
        notes="Delivery within two weeks",
        terms_and_conditions="50% advance",
    )

    filename, output = await PdfService(test_db_session).render_quote(quote.id)

    assert filename == "QT-0001.pdf"
    assert output.getvalue().startswith(b"%PDF-")


async def test_render_quote_with_company_letterhead_and_unicode(test_db_session, make_quote, admin_user):
    await SettingService(test_db_session).upsert_many(
        {
            "companyName": "Über Systems",
            "companyAddress": "1 Main St\nPune 411001",
            "companyGSTIN": "27ABCDE1234F1Z5",
        },
        updated_by=admin_user.id,
    )
    quote = await make_quote(items=[(1, "10.00")] * 60)
    await QuoteService(test_db_session).update_quote(quote.id, QuoteUpdate(notes="Thanks 🙏"))

    _, output = await PdfService(test_db_session).render_quote(quote.id)

    assert output.getvalue().startswith(b"%PDF-")


async def test_render_invoice_with_payments(test_db_session, make_quote, regular_user):
    quote = await make_quote()
    invoice = await ConversionService(test_db_session).convert_to_invoice(quote.id)
    await PaymentService(test_db_session).record_payment(
        invoice.id,
        PaymentCreate(amount=Decimal("100"), payment_method="bank_transfer", transaction_id="UTR-1"),
        recorded_by=regular_user.id,
    )

    filename, output = await PdfService(test_db_session).render_invoice(invoice.id)

    assert filename == "INV-0001.pdf"
    assert output.getvalue().startswith(b"%PDF-")


async def test_unknown_documents(test_db_session):
    service = PdfService(test_db_session)

    with pytest.raises(NotFoundError):
        await service.render_quote(uuid4())
    with pytest.raises(NotFoundError):
        await service.render_invoice(uuid4())
