from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from loguru import logger

from .errors import InvalidInputError, InvalidInputReason
from .models import DiscountSpec, Invoice, LineItem, TaxComponent, TaxConfig
from .money import ZERO, round_down, round_half_up, to_decimal

_HUNDRED = Decimal(100)


def compute_invoice(
    line_items: Sequence[LineItem],
    discount: DiscountSpec | None = None,
    *,
    tax_config: TaxConfig,
    service_charge: Decimal | int | str | None = None,
) -> Invoice:
    """Compute an itemized invoice from a cart.

    Rounding to whole cents happens only at the reported figures: line totals,
    subtotal, discount, tax components and the grand total. Everything downstream
    of a rounded figure is derived from the rounded value, so
    ``grand_total == taxable_amount + tax_total + service_charge`` holds exactly.

    Raises InvalidInputError before any arithmetic if an input is out of range.
    """
    items = tuple(line_items)
    _validate_items(items)
    _validate_discount(discount)
    _validate_tax_config(tax_config)
    charge = _validate_service_charge(service_charge)

    line_totals = tuple(round_half_up(li.unit_price * li.quantity) for li in items)
    subtotal = round_half_up(_exact_subtotal(items))

    discount_applied = _resolve_discount(subtotal, discount)
    taxable_amount = subtotal - discount_applied

    components = _tax_components(taxable_amount, tax_config)
    tax_total = sum((c.amount for c in components), ZERO)

    grand_total = taxable_amount + tax_total + charge

    logger.debug(
        "Invoice computed: items={} subtotal={} discount={} taxable={} tax={} service={} total={}",
        len(items),
        subtotal,
        discount_applied,
        taxable_amount,
        tax_total,
        charge,
        grand_total,
    )

    return Invoice(
        line_items=items,
        line_totals=line_totals,
        subtotal=subtotal,
        discount_applied=discount_applied,
        taxable_amount=taxable_amount,
        tax_rate_percent=tax_config.rate_percent,
        tax_components=components,
        tax_total=tax_total,
        service_charge=charge,
        grand_total=grand_total,
    )


def subtotal_of(line_items: Sequence[LineItem]) -> Decimal:
    """Rounded cart subtotal, as ``compute_invoice`` would report it."""
    items = tuple(line_items)
    _validate_items(items)
    return round_half_up(_exact_subtotal(items))


def _exact_subtotal(items: tuple[LineItem, ...]) -> Decimal:
    return sum((li.unit_price * li.quantity for li in items), Decimal(0))


def _validate_items(items: tuple[LineItem, ...]) -> None:
    if not items:
        raise InvalidInputError(InvalidInputReason.EMPTY_CART, "empty cart")
    for li in items:
        if li.quantity < 1:
            raise InvalidInputError(
                InvalidInputReason.INVALID_QUANTITY,
                f"item {li.item_id!r} has quantity {li.quantity}, expected at least 1",
            )
        if li.unit_price < 0:
            raise InvalidInputError(
                InvalidInputReason.NEGATIVE_PRICE,
                f"item {li.item_id!r} has negative unit price {li.unit_price}",
            )


def _validate_discount(discount: DiscountSpec | None) -> None:
    if discount is None:
        return
    if discount.amount is not None and discount.percent is not None:
        raise InvalidInputError(InvalidInputReason.AMBIGUOUS_DISCOUNT, "ambiguous discount mode")
    if discount.percent is not None and not (0 <= discount.percent <= _HUNDRED):
        raise InvalidInputError(
            InvalidInputReason.DISCOUNT_PERCENT_OUT_OF_RANGE,
            f"discount percent {discount.percent} outside [0, 100]",
        )
    if discount.amount is not None and discount.amount < 0:
        raise InvalidInputError(
            InvalidInputReason.NEGATIVE_DISCOUNT,
            f"discount amount {discount.amount} is negative",
        )


def _validate_tax_config(tax_config: TaxConfig) -> None:
    if tax_config.rate_percent < 0:
        raise InvalidInputError(
            InvalidInputReason.NEGATIVE_TAX_RATE,
            f"tax rate {tax_config.rate_percent}% is negative",
        )


def _validate_service_charge(service_charge: Decimal | int | str | None) -> Decimal:
    if service_charge is None:
        return ZERO
    try:
        charge = to_decimal(service_charge)
    except ValueError as exc:
        raise InvalidInputError(
            InvalidInputReason.INVALID_SERVICE_CHARGE,
            f"service charge {service_charge!r} is not a monetary amount",
        ) from exc
    if not charge.is_finite():
        raise InvalidInputError(
            InvalidInputReason.INVALID_SERVICE_CHARGE,
            f"service charge {service_charge!r} is not a finite amount",
        )
    if charge < 0:
        raise InvalidInputError(
            InvalidInputReason.NEGATIVE_SERVICE_CHARGE,
            f"service charge {charge} is negative",
        )
    return round_half_up(charge)


def _resolve_discount(subtotal: Decimal, discount: DiscountSpec | None) -> Decimal:
    if discount is None:
        return ZERO

    if discount.percent is not None:
        raw = subtotal * discount.percent / _HUNDRED
    elif discount.amount is not None:
        raw = discount.amount
    else:
        return ZERO

    if raw > subtotal:
        logger.warning("Discount {} exceeds subtotal {}; clamping", raw, subtotal)
        raw = subtotal

    # truncated to the cent, never rounded up
    return round_down(raw)


def _tax_components(taxable_amount: Decimal, tax_config: TaxConfig) -> tuple[TaxComponent, ...]:
    rate = tax_config.rate_percent
    tax_total = round_half_up(taxable_amount * rate / _HUNDRED)

    if not tax_config.split_equally:
        return (TaxComponent(label=tax_config.label, amount=tax_total, rate_percent=rate),)

    first = round_half_up(tax_total / 2)
    second = tax_total - first
    half_rate = rate / 2
    first_label, second_label = tax_config.split_labels
    return (
        TaxComponent(label=first_label, amount=first, rate_percent=half_rate),
        TaxComponent(label=second_label, amount=second, rate_percent=half_rate),
    )
