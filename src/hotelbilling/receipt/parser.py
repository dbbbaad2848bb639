from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal

from ..money import parse_amount
from .formatter import (
    DISCOUNT_LABEL,
    GRAND_TOTAL_LABEL,
    ORDER_DETAILS_HEADING,
    SERVICE_CHARGE_LABEL,
    SUBTOTAL_LABEL,
    TAX_TOTAL_LABEL,
    TAXABLE_LABEL,
)


@dataclass(frozen=True, slots=True)
class ReceiptTotals:
    grand_total: Decimal
    subtotal: Decimal | None = None
    discount: Decimal | None = None
    taxable_amount: Decimal | None = None
    tax_total: Decimal | None = None
    service_charge: Decimal | None = None
    receipt_number: str | None = None


_ROW = re.compile(r"^(?P<label>[^:\s][^:]*):\s*(?P<value>.*?)\s*$")
_ITEM_COUNT = re.compile(r"\s*\(\d+ items?\)$")
_RULE = re.compile(r"^=+$")

_HEADER, _ITEMS, _TOTALS = "header", "items", "totals"


def parse_receipt_totals(text: str) -> ReceiptTotals:
    """Read the money rows back out of a receipt rendered by ``format_receipt_text``.

    Rows inside the order block are skipped, so item names never shadow a
    totals row. Text without an order block is read as totals throughout.
    """
    lines = text.splitlines()
    section = _HEADER if ORDER_DETAILS_HEADING in lines else _TOTALS

    values: dict[str, Decimal] = {}
    receipt_number = None

    for line in lines:
        if section == _HEADER:
            if line == ORDER_DETAILS_HEADING:
                section = _ITEMS
                continue
            m = _ROW.match(line)
            if m and m.group("label") == "Receipt #":
                receipt_number = m.group("value") or None
            continue

        if section == _ITEMS:
            if _RULE.match(line):
                section = _TOTALS
            continue

        m = _ROW.match(line)
        if not m:
            continue
        label = _ITEM_COUNT.sub("", m.group("label"))
        if label not in _MONEY_LABELS or label in values:
            continue
        amount = _parse_money(m.group("value"), negative=label == DISCOUNT_LABEL)
        if amount is not None:
            values[label] = amount

    grand_total = values.get(GRAND_TOTAL_LABEL)
    if grand_total is None:
        raise ValueError(f"No '{GRAND_TOTAL_LABEL}' row found in receipt text.")

    return ReceiptTotals(
        grand_total=grand_total,
        subtotal=values.get(SUBTOTAL_LABEL),
        discount=values.get(DISCOUNT_LABEL),
        taxable_amount=values.get(TAXABLE_LABEL),
        tax_total=values.get(TAX_TOTAL_LABEL),
        service_charge=values.get(SERVICE_CHARGE_LABEL),
        receipt_number=receipt_number,
    )


_MONEY_LABELS = {
    SUBTOTAL_LABEL,
    DISCOUNT_LABEL,
    TAXABLE_LABEL,
    TAX_TOTAL_LABEL,
    SERVICE_CHARGE_LABEL,
    GRAND_TOTAL_LABEL,
}


def _parse_money(value: str, *, negative: bool = False) -> Decimal | None:
    amount = parse_amount(value)
    if amount is None:
        return None
    # discount rows print as -₹x; report the magnitude
    return abs(amount) if negative else amount
