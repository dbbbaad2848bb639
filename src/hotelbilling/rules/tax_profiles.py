from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from ..calculator import subtotal_of
from ..models import LineItem, TaxConfig
from .loader import TaxProfile, TaxSlab


def resolve_slab_rate(amount: Decimal, slabs: Sequence[TaxSlab]) -> Decimal:
    rate = Decimal(0)
    for slab in sorted(slabs, key=lambda s: s.min_amount):
        if amount >= slab.min_amount:
            rate = slab.rate_percent
    return rate


def tax_config_for(profile: TaxProfile, line_items: Sequence[LineItem] = ()) -> TaxConfig:
    """Resolve a profile to the concrete TaxConfig for a cart.

    Slabbed profiles pick their rate from the undiscounted subtotal, so they
    need the cart; fixed-rate profiles ignore it.
    """
    if profile.slabs:
        rate = resolve_slab_rate(subtotal_of(line_items), profile.slabs)
    else:
        rate = profile.rate_percent if profile.rate_percent is not None else Decimal(0)

    return TaxConfig(
        rate_percent=rate,
        split_equally=profile.split_equally,
        label=profile.label,
        split_labels=profile.split_labels,
    )
