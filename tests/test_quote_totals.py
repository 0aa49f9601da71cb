"""
Quote totals and lifecycle transition rules.
"""

from decimal import Decimal

import pytest

from app.core.exceptions import ValidationError
from app.models.quote import QuoteStatus
from app.schemas.quote import QuoteItemCreate
from app.services.quote_service import (
    compute_quote_totals,
    prepare_items,
    validate_status_transition,
)


def test_subtotal_and_total():
    totals = compute_quote_totals([(2, Decimal("100")), (1, Decimal("50"))])

    assert totals.subtotal == Decimal("250.00")
    assert totals.total == Decimal("250.00")


def test_total_applies_discount_taxes_and_shipping():
    totals = compute_quote_totals(
        [(3, Decimal("19.99"))],
        discount=Decimal("5"),
        cgst=Decimal("4.50"),
        sgst=Decimal("4.50"),
        igst=Decimal("0"),
        shipping_charges=Decimal("10"),
    )

    assert totals.subtotal == Decimal("59.97")
    assert totals.total == Decimal("73.97")


def test_amounts_round_half_up_to_cents():
    totals = compute_quote_totals([(1, Decimal("0.005"))])

    assert totals.subtotal == Decimal("0.01")


def test_no_items_gives_zero_subtotal():
    totals = compute_quote_totals([], shipping_charges=Decimal("12.50"))

    assert totals.subtotal == Decimal("0.00")
    assert totals.total == Decimal("12.50")


@pytest.mark.parametrize("field", ["discount", "cgst", "sgst", "igst", "shipping_charges"])
def test_negative_adjustment_is_rejected(field):
    with pytest.raises(ValidationError):
        compute_quote_totals([(1, Decimal("10"))], **{field: Decimal("-1")})


def test_discount_larger_than_subtotal_is_rejected():
    with pytest.raises(ValidationError):
        compute_quote_totals([(1, Decimal("10"))], discount=Decimal("10.01"))


def test_prepare_items_defaults_sort_order_to_position():
    items = prepare_items([
        QuoteItemCreate(description="A", quantity=1, unit_price=Decimal("1")),
        QuoteItemCreate(description="B", quantity=2, unit_price=Decimal("2.50"), sort_order=0),
    ])

    assert [(item["sort_order"], item["line_number"]) for item in items] == [(0, 0), (0, 1)]
    assert items[1]["subtotal"] == Decimal("5.00")


@pytest.mark.parametrize("quantity", [0, -3])
def test_non_positive_quantity_is_rejected(quantity):
    with pytest.raises(ValidationError):
        prepare_items([QuoteItemCreate(description="A", quantity=quantity, unit_price=Decimal("1"))])


def test_negative_unit_price_is_rejected():
    with pytest.raises(ValidationError):
        prepare_items([QuoteItemCreate(description="A", quantity=1, unit_price=Decimal("-0.01"))])


@pytest.mark.parametrize(
    "current, target",
    [
        (QuoteStatus.DRAFT, QuoteStatus.SENT),
        (QuoteStatus.SENT, QuoteStatus.APPROVED),
        (QuoteStatus.SENT, QuoteStatus.REJECTED),
        (QuoteStatus.APPROVED, QuoteStatus.APPROVED),
    ],
)
def test_allowed_transitions(current, target):
    validate_status_transition(current, target)


@pytest.mark.parametrize(
    "current, target",
    [
        (QuoteStatus.DRAFT, QuoteStatus.APPROVED),
        (QuoteStatus.DRAFT, QuoteStatus.REJECTED),
        (QuoteStatus.SENT, QuoteStatus.DRAFT),
        (QuoteStatus.REJECTED, QuoteStatus.SENT),
        (QuoteStatus.APPROVED, QuoteStatus.SENT),
        (QuoteStatus.APPROVED, QuoteStatus.INVOICED),
        (QuoteStatus.INVOICED, QuoteStatus.DRAFT),
    ],
)
def test_rejected_transitions(current, target):
    with pytest.raises(ValidationError):
        validate_status_transition(current, target)


def test_largest_storable_amounts_are_accepted():
    totals = compute_quote_totals([(1, Decimal("9999999999.99"))])
    assert totals.total == Decimal("9999999999.99")


@pytest.mark.parametrize("field", ["discount", "cgst", "shipping_charges"])
def test_oversized_adjustment_is_rejected(field):
    with pytest.raises(ValidationError):
        compute_quote_totals([(1, Decimal("10"))], **{field: Decimal("10000000000")})


def test_total_beyond_column_range_is_rejected():
    with pytest.raises(ValidationError):
        compute_quote_totals([(1, Decimal("9999999999.99"))], cgst=Decimal("0.01"))


@pytest.mark.parametrize(
    "quantity, unit_price",
    [(1, "10000000000"), (2, "5000000000.00"), (2_147_483_648, "1")],
)
def test_oversized_items_are_rejected(quantity, unit_price):
    with pytest.raises(ValidationError):
        prepare_items([QuoteItemCreate(description="A", quantity=quantity, unit_price=Decimal(unit_price))])
