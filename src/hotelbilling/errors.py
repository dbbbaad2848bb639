from __future__ import annotations

from enum import Enum


class InvalidInputReason(str, Enum):
    EMPTY_CART = "empty_cart"
    INVALID_QUANTITY = "invalid_quantity"
    NEGATIVE_PRICE = "negative_price"
    AMBIGUOUS_DISCOUNT = "ambiguous_discount"
    DISCOUNT_PERCENT_OUT_OF_RANGE = "discount_percent_out_of_range"
    NEGATIVE_DISCOUNT = "negative_discount"
    NEGATIVE_TAX_RATE = "negative_tax_rate"
    NEGATIVE_SERVICE_CHARGE = "negative_service_charge"
    INVALID_SERVICE_CHARGE = "invalid_service_charge"


class InvalidInputError(ValueError):
    """Raised before any arithmetic when an invoice input breaks a precondition."""

    def __init__(self, reason: InvalidInputReason, message: str) -> None:
        super().__init__(message)
        self.reason = reason
        self.message = message

    def __str__(self) -> str:
        return f"{self.message} ({self.reason.value})"
