from __future__ import annotations

import re
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

_NUMBER = re.compile(r"-?\d[\d,]*(?:\.\d+)?")


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # repr keeps the shortest round-tripping form, so 99.99 stays 99.99
        return Decimal(repr(value))
    try:
        return Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"Not a monetary amount: {value!r}") from exc


def round_half_up(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def round_down(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_DOWN)


def format_amount(value: Decimal, symbol: str = "₹") -> str:
    """Render an already-rounded amount for display, e.g. ``₹1,234.50``."""
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def parse_amount(text: str) -> Decimal | None:
    """Inverse of :func:`format_amount`: pull the first number out of ``text``."""
    m = _NUMBER.search(text)
    if not m:
        return None
    raw = m.group(0).replace(",", "")
    try:
        value = Decimal(raw)
    except InvalidOperation:
        return None
    if text.lstrip().startswith("-") and value > 0:
        value = -value
    return value


def format_rate(rate_percent: Decimal) -> str:
    """``Decimal("9.00")`` -> ``"9"``, ``Decimal("2.5")`` -> ``"2.5"``."""
    normalized = rate_percent.normalize()
    if normalized == normalized.to_integral_value():
        return str(normalized.quantize(Decimal(1)))
    return format(normalized, "f")
