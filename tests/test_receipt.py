from datetime import datetime
from decimal import Decimal

import pytest

from hotelbilling.calculator import compute_invoice
from hotelbilling.models import DiscountSpec, LineItem, ReceiptMetadata, TaxConfig
from hotelbilling.receipt.formatter import COMPACT_WIDTH, WIDE_WIDTH, format_receipt_text
from hotelbilling.receipt.parser import parse_receipt_totals
from hotelbilling.rules.loader import ReceiptLayout


def _cart() -> list[LineItem]:
    return [
        LineItem(item_id="11", names={"en": "Paneer Tikka", "hi": "पनीर टिक्का"}, unit_price=Decimal("250"), quantity=1),
        LineItem(item_id="12", names={"en": "Masala Chai"}, unit_price=Decimal("20"), quantity=3),
    ]


def _metadata() -> ReceiptMetadata:
    return ReceiptMetadata(
        receipt_number="RB-1001",
        timestamp=datetime(2026, 10, 19, 13, 45, 5),
        customer_name="Asha",
        payment_method="upi",
        customer_phone="+91 98765 43210",
        table_number=7,
    )


def test_receipt_lists_items_and_split_tax() -> None:
    invoice = compute_invoice(
        _cart(), DiscountSpec.flat("50"), tax_config=TaxConfig(rate_percent=Decimal("18"), split_equally=True)
    )

    text = format_receipt_text(invoice, _metadata())

    assert "TAX INVOICE" in text
    assert "RB-1001" in text
    assert "19/10/2026" in text
    assert "13:45:05" in text
    assert "Paneer Tikka" in text
    assert "1 x ₹250.00 = ₹250.00" in text
    assert "3 x ₹20.00 = ₹60.00" in text
    assert "Subtotal (2 items):" in text
    assert "-₹50.00" in text
    assert "GST Breakdown (18%):" in text
    assert "CGST (9%):" in text
    assert "SGST (9%):" in text
    assert "₹306.80" in text
    assert "UPI" in text
    assert "Service Charge" not in text


def test_compact_receipt_fits_its_width() -> None:
    invoice = compute_invoice(_cart(), tax_config=TaxConfig(rate_percent=Decimal("5")))

    compact = format_receipt_text(invoice, _metadata(), compact=True)
    wide = format_receipt_text(invoice, _metadata(), compact=False)

    assert max(len(line) for line in compact.splitlines()) <= COMPACT_WIDTH
    assert max(len(line) for line in wide.splitlines()) <= WIDE_WIDTH
    assert "=" * WIDE_WIDTH in wide


def test_zero_discount_row_is_omitted_and_service_charge_shown() -> None:
    invoice = compute_invoice(_cart(), tax_config=TaxConfig(rate_percent=Decimal("5")), service_charge="15")

    text = format_receipt_text(invoice, ReceiptMetadata())

    assert "Discount" not in text
    assert "Service Charge:" in text
    assert "N/A" in text
    assert "Guest" in text
    assert "CASH" in text


def test_receipt_uses_locale_names_and_layout() -> None:
    invoice = compute_invoice(_cart(), tax_config=TaxConfig(rate_percent=Decimal("18"), label="IGST"))
    layout = ReceiptLayout(
        hotel_name="HOTEL SAGAR",
        tagline="Rooms & Dining",
        currency_symbol="Rs.",
        footer=("Thank you for dining with us!",),
    )

    text = format_receipt_text(invoice, _metadata(), layout=layout, locale="hi", compact=False)

    assert "HOTEL SAGAR" in text
    assert "पनीर टिक्का" in text
    assert "Masala Chai" in text
    assert "IGST (18%):" in text
    assert "Rs.250.00" in text
    assert "Thank you for dining with us!" in text


def test_receipt_total_round_trips_through_parser() -> None:
    items = [LineItem(item_id="r", names={"en": "Deluxe Room"}, unit_price=Decimal("4599.99"), quantity=3)]
    invoice = compute_invoice(
        items,
        DiscountSpec.percentage("7.5"),
        tax_config=TaxConfig(rate_percent=Decimal("12"), split_equally=True),
        service_charge="99.5",
    )

    totals = parse_receipt_totals(format_receipt_text(invoice, _metadata()))

    assert totals.grand_total == invoice.grand_total
    assert totals.subtotal == invoice.subtotal
    assert totals.discount == invoice.discount_applied
    assert totals.taxable_amount == invoice.taxable_amount
    assert totals.tax_total == invoice.tax_total
    assert totals.service_charge == invoice.service_charge
    assert totals.receipt_number == "RB-1001"


def test_parser_reports_missing_optional_rows_as_none() -> None:
    invoice = compute_invoice(_cart(), tax_config=TaxConfig(rate_percent=Decimal("5")))

    totals = parse_receipt_totals(format_receipt_text(invoice, ReceiptMetadata()))

    assert totals.grand_total == invoice.grand_total
    assert totals.discount is None
    assert totals.service_charge is None


def test_parser_requires_a_grand_total_row() -> None:
    with pytest.raises(ValueError, match="TOTAL AMOUNT"):
        parse_receipt_totals("Subtotal (1 items): ₹10.00\n")


def test_label_like_item_names_do_not_shadow_totals() -> None:
    items = [
        LineItem(item_id="c1", names={"en": "TOTAL AMOUNT: combo"}, unit_price=Decimal("199"), quantity=1),
        LineItem(item_id="t1", names={"en": "Discount: Happy Hour Thali"}, unit_price=Decimal("149"), quantity=2),
        LineItem(item_id="e1", names={"en": "=" * COMPACT_WIDTH}, unit_price=Decimal("10"), quantity=1),
        LineItem(item_id="s1", names={"en": "Service Charge: 999.00"}, unit_price=Decimal("5"), quantity=1),
    ]
    invoice = compute_invoice(items, DiscountSpec.flat("20"), tax_config=TaxConfig(rate_percent=Decimal("5")))

    totals = parse_receipt_totals(format_receipt_text(invoice, _metadata()))

    assert totals.grand_total == invoice.grand_total
    assert totals.discount == Decimal("20.00")
    assert totals.subtotal == invoice.subtotal
    assert totals.service_charge is None


def test_single_row_subtotal_is_singular() -> None:
    items = [LineItem(item_id="1", names={"en": "Lassi"}, unit_price=Decimal("60"), quantity=2)]
    invoice = compute_invoice(items, tax_config=TaxConfig(rate_percent=Decimal("5")))

    text = format_receipt_text(invoice, ReceiptMetadata())

    assert "Subtotal (1 item):" in text
    assert "1 items" not in text
    assert parse_receipt_totals(text).subtotal == Decimal("120.00")
