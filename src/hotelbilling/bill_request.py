from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from pydantic import BaseModel, Field

from .models import DiscountSpec, LineItem


class BillItemRequest(BaseModel):
    item_id: str
    quantity: int = Field(ge=1)


class BillCreateRequest(BaseModel):
    """Body for the bill-creation endpoint.

    Carries only item ids and quantities; the server prices the cart and
    computes its own totals, so no client-side figures are sent.
    """

    customer_name: str = "Guest"
    customer_phone: str = ""
    payment_method: str = "cash"
    items: list[BillItemRequest] = Field(min_length=1)
    apply_gst: bool = True
    discount_amount: Decimal = Decimal(0)
    discount_percentage: Decimal = Decimal(0)
    service_charge: Decimal = Decimal(0)

    @classmethod
    def from_cart(
        cls,
        line_items: Sequence[LineItem],
        *,
        customer_name: str | None = None,
        customer_phone: str | None = None,
        payment_method: str = "cash",
        apply_gst: bool = True,
        discount: DiscountSpec | None = None,
        service_charge: Decimal | None = None,
    ) -> "BillCreateRequest":
        return cls(
            customer_name=(customer_name or "").strip() or "Guest",
            customer_phone=(customer_phone or "").strip(),
            payment_method=payment_method,
            items=[BillItemRequest(item_id=li.item_id, quantity=li.quantity) for li in line_items],
            apply_gst=apply_gst,
            discount_amount=discount.amount if discount and discount.amount is not None else Decimal(0),
            discount_percentage=discount.percent if discount and discount.percent is not None else Decimal(0),
            service_charge=service_charge or Decimal(0),
        )

    def to_payload(self) -> dict:
        return self.model_dump(mode="json")
