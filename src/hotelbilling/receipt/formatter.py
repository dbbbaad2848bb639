from __future__ import annotations

import textwrap
from datetime import datetime
from decimal import Decimal

from ..models import Invoice, ReceiptMetadata
from ..money import format_amount, format_rate
from ..rules.loader import ReceiptLayout

COMPACT_WIDTH = 32
WIDE_WIDTH = 48

SUBTOTAL_LABEL = "Subtotal"
DISCOUNT_LABEL = "Discount"
TAXABLE_LABEL = "Taxable Amount"
TAX_TOTAL_LABEL = "Total GST"
SERVICE_CHARGE_LABEL = "Service Charge"
GRAND_TOTAL_LABEL = "TOTAL AMOUNT"
ORDER_DETAILS_HEADING = "Order Details:"


def format_receipt_text(
    invoice: Invoice,
    metadata: ReceiptMetadata,
    *,
    layout: ReceiptLayout | None = None,
    locale: str = "en",
    compact: bool = True,
) -> str:
    """Render an invoice as a fixed-width plain-text receipt.

    Only the invoice's own rounded figures are printed; nothing is recomputed
    here, so the printed total always matches ``invoice.grand_total``.
    """
    layout = layout or ReceiptLayout()
    width = COMPACT_WIDTH if compact else WIDE_WIDTH

    def money(value: Decimal) -> str:
        return format_amount(value, layout.currency_symbol)

    out: list[str] = []
    out.append(layout.hotel_name.center(width).rstrip())
    if layout.tagline:
        out.append(layout.tagline.center(width).rstrip())
    if layout.registration_line:
        out.extend(ln.center(width).rstrip() for ln in textwrap.wrap(layout.registration_line, width))
    out.append("=" * width)
    out.append(layout.title.center(width).rstrip())

    out.append(_row("Receipt #", str(metadata.receipt_number or "N/A"), width))
    if metadata.table_number is not None:
        out.append(_row("Table", str(metadata.table_number), width))
    if metadata.room_number is not None:
        out.append(_row("Room", str(metadata.room_number), width))
    out.extend(_timestamp_rows(metadata.timestamp, width))
    out.append("-" * width)

    out.append("Customer Details:")
    out.append(_row("Name", metadata.customer_name or "Guest", width))
    if metadata.customer_phone:
        out.append(_row("Phone", metadata.customer_phone, width))
    out.append("-" * width)

    out.append(ORDER_DETAILS_HEADING)
    for item, line_total in zip(invoice.line_items, invoice.line_totals):
        # item lines stay indented; parse_receipt_totals relies on it
        name_lines = textwrap.wrap(item.display_name(locale), width - 1) or [item.item_id]
        out.extend(" " + ln for ln in name_lines)
        out.append(f"  {item.quantity} x {money(item.unit_price)} = {money(line_total)}")
    out.append("=" * width)

    rows = len(invoice.line_items)
    noun = "item" if rows == 1 else "items"
    out.append(_row(f"{SUBTOTAL_LABEL} ({rows} {noun})", money(invoice.subtotal), width))
    if invoice.discount_applied > 0:
        out.append(_row(DISCOUNT_LABEL, "-" + money(invoice.discount_applied), width))
    out.append(_row(TAXABLE_LABEL, money(invoice.taxable_amount), width))
    out.append(f"GST Breakdown ({format_rate(invoice.tax_rate_percent)}%):")
    for component in invoice.tax_components:
        label = f"  {component.label} ({format_rate(component.rate_percent)}%)"
        out.append(_row(label, money(component.amount), width))
    out.append(_row(TAX_TOTAL_LABEL, money(invoice.tax_total), width))
    if invoice.service_charge > 0:
        out.append(_row(SERVICE_CHARGE_LABEL, money(invoice.service_charge), width))
    out.append("=" * width)
    out.append(_row(GRAND_TOTAL_LABEL, money(invoice.grand_total), width))
    out.append("=" * width)

    out.append(_row("Payment Mode", (metadata.payment_method or "cash").upper(), width))
    out.append("PAID".center(width).rstrip())

    if layout.footer or metadata.generated_by:
        out.append("-" * width)
    for line in layout.footer:
        out.append(line.center(width).rstrip())
    if metadata.generated_by:
        out.append(_row("Generated by", metadata.generated_by, width))

    return "\n".join(out) + "\n"


def _row(label: str, value: str, width: int) -> str:
    head = f"{label}:"
    pad = width - len(head) - len(value)
    if pad < 1:
        return f"{head} {value}"
    return head + " " * pad + value


def _timestamp_rows(timestamp: datetime | str | None, width: int) -> list[str]:
    if timestamp is None:
        return []
    if isinstance(timestamp, datetime):
        return [
            _row("Date", timestamp.strftime("%d/%m/%Y"), width),
            _row("Time", timestamp.strftime("%H:%M:%S"), width),
        ]
    return [_row("Date", str(timestamp), width)]
