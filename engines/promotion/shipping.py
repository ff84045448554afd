"""
Storefront Promotion Engine — Free Shipping Resolution
========================================================
Free shipping compares the cart subtotal against an offer's
min_amount and waives the delivery fee; it never discounts goods.

When no offer qualifies but one is within reach, an advisory
"spend N more" hint is produced. The hint is display-only: it adds
nothing to applied offers or totals.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional

from engines.promotion.models import (
    FreeShippingHint,
    FreeShippingOffer,
    Offer,
    OfferType,
)
from engines.promotion.policies import is_offer_valid


@dataclass(frozen=True)
class FreeShippingResolution:
    is_free: bool
    offer: Optional[FreeShippingOffer] = None
    message: Optional[str] = None
    hint: Optional[FreeShippingHint] = None


def free_shipping_candidates(
    offers: Iterable[Offer], now: datetime
) -> List[FreeShippingOffer]:
    """
    Valid free-shipping offers, highest priority first.

    Ties keep input order (stable sort). auto_apply is not consulted.
    """
    candidates = [
        o for o in offers
        if o.offer_type is OfferType.FREE_SHIPPING
        and is_offer_valid(o, now)
        and o.min_amount > 0
    ]
    return sorted(candidates, key=lambda o: -o.priority)


def resolve_free_shipping(
    offers: Iterable[Offer],
    subtotal: float,
    base_delivery_fee: float,
    *,
    now: datetime,
    currency: str = "EGP",
) -> FreeShippingResolution:
    candidates = free_shipping_candidates(offers, now)

    for offer in candidates:
        if subtotal >= offer.min_amount:
            return FreeShippingResolution(
                is_free=True,
                offer=offer,
                message=(
                    f"🎉 Free delivery! (you saved "
                    f"{base_delivery_fee:.2f} {currency})"
                ),
            )

    for offer in candidates:
        if offer.min_amount > subtotal:
            remaining = offer.min_amount - subtotal
            message = (
                f"Add {remaining:.2f} {currency} more to get free delivery"
            )
            return FreeShippingResolution(
                is_free=False,
                message=message,
                hint=FreeShippingHint(
                    offer=offer, remaining=remaining, message=message,
                ),
            )

    return FreeShippingResolution(is_free=False)
