from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from .models import LineItem


class MenuItemEntry(BaseModel):
    """One menu item as served by the catalog endpoint."""

    id: int | str
    name_en: str = Field(min_length=1)
    name_hi: str | None = None
    price: Decimal = Field(ge=0)
    category: str | dict | None = None

    @property
    def category_name(self) -> str | None:
        if isinstance(self.category, dict):
            return self.category.get("name")
        return self.category

    def to_line_item(self, quantity: int = 1) -> LineItem:
        return LineItem(
            item_id=str(self.id),
            names=_names(en=self.name_en, hi=self.name_hi),
            unit_price=self.price,
            quantity=quantity,
        )


class RoomEntry(BaseModel):
    id: int | str
    type_en: str = Field(min_length=1)
    type_hi: str | None = None
    price_per_day: Decimal = Field(ge=0)
    price_per_hour: Decimal | None = Field(default=None, ge=0)

    def to_line_item(self, days: int = 1) -> LineItem:
        return LineItem(
            item_id=f"room-{self.id}",
            names=_names(en=self.type_en, hi=self.type_hi),
            unit_price=self.price_per_day,
            quantity=days,
        )


def _names(**by_locale: str | None) -> dict[str, str]:
    return {locale: name for locale, name in by_locale.items() if name}
