"""
Storefront Promotion Engine — Errors
======================================
None of these ever escape calculate_cart for business data:
malformed offers are dropped at the catalog boundary and pricing
itself is total.
"""

from __future__ import annotations


class PromotionError(Exception):
    """Base error for promotion engine operations."""
    pass


class MalformedOfferError(PromotionError):
    """An offer row cannot be turned into a usable offer."""

    def __init__(self, offer_id: str, reason: str):
        self.offer_id = offer_id
        self.reason = reason
        super().__init__(f"Offer '{offer_id}' is malformed: {reason}")


class UnsupportedOfferTypeError(PromotionError):
    """No calculator is registered for an offer type."""

    def __init__(self, offer_type):
        self.offer_type = offer_type
        super().__init__(
            f"No discount calculator registered for offer type '{offer_type}'."
        )
