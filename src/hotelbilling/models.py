from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_validator


class LineItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    item_id: str
    # (locale, label) pairs; a mapping is accepted on input
    names: tuple[tuple[str, str], ...] = ()
    unit_price: Decimal
    quantity: int = 1

    @field_validator("names", mode="before")
    @classmethod
    def _names_from_mapping(cls, value: object) -> object:
        if isinstance(value, Mapping):
            return tuple(value.items())
        return value

    def name_for(self, locale: str) -> str | None:
        for tag, name in self.names:
            if tag == locale and name:
                return name
        return None

    def display_name(self, locale: str = "en", *, fallback: str = "en") -> str:
        name = self.name_for(locale) or self.name_for(fallback)
        if name:
            return name
        for _, value in self.names:
            if value:
                return value
        return self.item_id


class DiscountSpec(BaseModel):
    """Bill-level reduction applied before tax: a flat amount or a percentage, never both."""

    model_config = ConfigDict(frozen=True)

    amount: Decimal | None = None
    percent: Decimal | None = None

    @classmethod
    def flat(cls, amount: Decimal | int | str) -> "DiscountSpec":
        return cls(amount=amount)

    @classmethod
    def percentage(cls, percent: Decimal | int | str) -> "DiscountSpec":
        return cls(percent=percent)


class TaxConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    rate_percent: Decimal
    split_equally: bool = False
    label: str = "GST"
    split_labels: tuple[str, str] = ("CGST", "SGST")


class TaxComponent(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    amount: Decimal
    rate_percent: Decimal


class Invoice(BaseModel):
    model_config = ConfigDict(frozen=True)

    line_items: tuple[LineItem, ...]
    line_totals: tuple[Decimal, ...]
    subtotal: Decimal
    discount_applied: Decimal
    taxable_amount: Decimal
    tax_rate_percent: Decimal
    tax_components: tuple[TaxComponent, ...]
    tax_total: Decimal
    service_charge: Decimal
    grand_total: Decimal

    @property
    def item_count(self) -> int:
        return sum(li.quantity for li in self.line_items)

    @property
    def savings(self) -> Decimal:
        return self.discount_applied


class ReceiptMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    receipt_number: str | int | None = None
    timestamp: datetime | str | None = None
    customer_name: str = "Guest"
    payment_method: str = "cash"
    customer_phone: str | None = None
    table_number: str | int | None = None
    room_number: str | int | None = None
    generated_by: str | None = None
