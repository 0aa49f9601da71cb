"""
Document numbering tests: the pure successor function and the counter row.
"""

import pytest

from app.core.exceptions import FormatError
from app.models.document_sequence import DocumentSeries, DocumentSequence
from app.services.numbering_service import NumberingService, next_document_number
from app.services.setting_service import SettingService


@pytest.mark.parametrize(
    "prefix, last, expected",
    [
        ("QT", None, "QT-0001"),
        ("QT", "", "QT-0001"),
        ("QT", "QT-0042", "QT-0043"),
        ("QT", "QT-9999", "QT-10000"),
        ("INV", "INV-0007", "INV-0008"),
        ("ACME-QT", "ACME-QT-0099", "ACME-QT-0100"),
    ],
)
def test_next_document_number(prefix, last, expected):
    assert next_document_number(prefix, last) == expected


def test_next_number_keeps_counter_across_prefix_change():
    """The suffix keeps counting; the new prefix is applied."""
    assert next_document_number("Q", "QT-0012") == "Q-0013"


@pytest.mark.parametrize("last", ["QT-ABC", "QT-", "garbage", "QT-12a", "QT-²", "QT-١٢", "QT-+12"])
def test_unparseable_suffix_raises_format_error(last):
    with pytest.raises(FormatError):
        next_document_number("QT", last)


async def test_sequential_issue_produces_consecutive_numbers(test_db_session):
    service = NumberingService(test_db_session)

    numbers = [await service.issue_number(DocumentSeries.QUOTE, "QT") for _ in range(12)]
    await test_db_session.commit()

    assert numbers == [f"QT-{n:04d}" for n in range(1, 13)]


async def test_series_are_independent(test_db_session):
    service = NumberingService(test_db_session)

    assert await service.issue_number(DocumentSeries.QUOTE, "QT") == "QT-0001"
    assert await service.issue_number(DocumentSeries.QUOTE, "QT") == "QT-0002"
    assert await service.issue_number(DocumentSeries.INVOICE, "INV") == "INV-0001"


async def test_rolled_back_number_is_reissued(test_db_session):
    service = NumberingService(test_db_session)
    assert await service.issue_number(DocumentSeries.QUOTE, "QT") == "QT-0001"
    await test_db_session.commit()

    assert await service.issue_number(DocumentSeries.QUOTE, "QT") == "QT-0002"
    await test_db_session.rollback()

    assert await service.issue_number(DocumentSeries.QUOTE, "QT") == "QT-0002"


async def test_corrupt_counter_raises_format_error(test_db_session):
    test_db_session.add(DocumentSequence(series=DocumentSeries.QUOTE.value, last_number="QT-XYZ"))
    await test_db_session.commit()

    with pytest.raises(FormatError):
        await NumberingService(test_db_session).issue_number(DocumentSeries.QUOTE, "QT")


async def test_prefixes_come_from_settings(test_db_session, admin_user):
    service = SettingService(test_db_session)
    assert await service.get_quote_prefix() == "QT"
    assert await service.get_invoice_prefix() == "INV"

    await service.upsert_many({"quotePrefix": "EST", "invoicePrefix": "BILL"}, updated_by=admin_user.id)

    assert await service.get_quote_prefix() == "EST"
    assert await service.get_invoice_prefix() == "BILL"
