"""
Storefront Promotion Engine — Offer Badges
============================================
Short per-kind labels shown on product cards next to the best offer.
"""

from __future__ import annotations

from dataclasses import dataclass

from engines.promotion.models import OfferType


@dataclass(frozen=True)
class OfferBadge:
    kind: str  # percent | amount | gift | delivery
    text: str

    def to_dict(self) -> dict:
        return {"kind": self.kind, "text": self.text}


def offer_badge(offer, *, currency: str = "EGP") -> OfferBadge:
    offer_type = offer.offer_type
    if offer_type in (OfferType.PERCENTAGE, OfferType.CATEGORY_DISCOUNT):
        return OfferBadge("percent", f"{offer.discount_percentage:g}% off")
    if offer_type is OfferType.FIXED:
        return OfferBadge("amount", f"{offer.discount_amount:g} {currency} off")
    if offer_type is OfferType.BUY_X_GET_Y:
        return OfferBadge(
            "gift", f"Buy {offer.min_quantity} get {offer.free_quantity} free",
        )
    if offer_type is OfferType.BOGO:
        return OfferBadge("gift", "Buy 1 get the 2nd free")
    if offer_type is OfferType.FREE_SHIPPING:
        return OfferBadge(
            "delivery", f"Free delivery over {offer.min_amount:g} {currency}",
        )
    return OfferBadge("amount", offer.title)
