"""
Storefront Promotion Engine — Offer and Pricing Models
========================================================
Offers are a closed family of frozen variants, one per offer kind,
each carrying only the fields its calculator needs. Pricing results
(AppliedOffer, CartCalculation) are derived and never persisted here.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple, Union

from core.primitives.catalog import Product
from core.time.temporal import OfferWindow


# ══════════════════════════════════════════════════════════════
# OFFER TYPE
# ══════════════════════════════════════════════════════════════

class OfferType(Enum):
    """Offer kinds. Values are the tags stored in the offers table."""
    PERCENTAGE = "percentage"
    FIXED = "fixed"
    CATEGORY_DISCOUNT = "category_discount"
    BUY_X_GET_Y = "buy_x_get_y"
    BOGO = "bogo"
    FREE_SHIPPING = "free_shipping"


PERCENTAGE_TYPES = frozenset({OfferType.PERCENTAGE, OfferType.CATEGORY_DISCOUNT})


# ══════════════════════════════════════════════════════════════
# OFFER SCOPE
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class OfferScope:
    """
    Product/category restriction of an offer.

    Both sets empty means the offer applies to every product.
    """
    products: FrozenSet[str] = frozenset()
    categories: FrozenSet[str] = frozenset()

    def __post_init__(self):
        if not isinstance(self.products, frozenset):
            raise TypeError("products must be a frozenset.")
        if not isinstance(self.categories, frozenset):
            raise TypeError("categories must be a frozenset.")

    @property
    def is_universal(self) -> bool:
        return not self.products and not self.categories

    def to_dict(self) -> dict:
        return {
            "applicable_products": sorted(self.products) or None,
            "applicable_categories": sorted(self.categories) or None,
        }


UNIVERSAL_SCOPE = OfferScope()


# ══════════════════════════════════════════════════════════════
# OFFER VARIANTS
# ══════════════════════════════════════════════════════════════

def _check_positive(value, field_name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{field_name} must be a number.")
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{field_name} must be > 0, got {value}.")


def _check_positive_int(value, field_name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{field_name} must be int.")
    if value < 1:
        raise ValueError(f"{field_name} must be >= 1, got {value}.")


@dataclass(frozen=True)
class _OfferHeader:
    """
    Fields shared by every offer kind.

    priority: higher wins; also the application/display order.
    auto_apply: only auto-apply offers take part in cart pricing.
    """
    offer_id: str
    title: str
    priority: int = 0
    is_active: bool = True
    auto_apply: bool = True
    window: OfferWindow = field(default_factory=OfferWindow)
    scope: OfferScope = UNIVERSAL_SCOPE
    description: str = ""

    def _check_header(self) -> None:
        if not self.offer_id or not isinstance(self.offer_id, str):
            raise ValueError("offer_id must be non-empty string.")
        if isinstance(self.priority, bool) or not isinstance(self.priority, int):
            raise TypeError("priority must be int.")
        if not isinstance(self.window, OfferWindow):
            raise TypeError("window must be OfferWindow.")
        if not isinstance(self.scope, OfferScope):
            raise TypeError("scope must be OfferScope.")

    def _header_dict(self) -> dict:
        return {
            "id": self.offer_id,
            "title": self.title,
            "type": self.offer_type.value,
            "priority": self.priority,
            "is_active": self.is_active,
            "auto_apply": self.auto_apply,
            "start_date": self.window.start.isoformat() if self.window.start else None,
            "end_date": self.window.end.isoformat() if self.window.end else None,
            "description": self.description,
            **self.scope.to_dict(),
        }


@dataclass(frozen=True)
class PercentageOffer(_OfferHeader):
    """Percent off every applicable line. Also backs category discounts."""
    discount_percentage: float = 0.0
    offer_type: OfferType = OfferType.PERCENTAGE

    def __post_init__(self):
        self._check_header()
        if self.offer_type not in PERCENTAGE_TYPES:
            raise ValueError(
                f"PercentageOffer cannot carry type '{self.offer_type.value}'."
            )
        _check_positive(self.discount_percentage, "discount_percentage")
        if self.discount_percentage > 100:
            raise ValueError(
                f"discount_percentage must be <= 100, got {self.discount_percentage}."
            )

    def to_dict(self) -> dict:
        d = self._header_dict()
        d["discount_percentage"] = self.discount_percentage
        return d


@dataclass(frozen=True)
class FixedAmountOffer(_OfferHeader):
    """A flat amount off the whole cart, once."""
    discount_amount: float = 0.0

    def __post_init__(self):
        self._check_header()
        _check_positive(self.discount_amount, "discount_amount")

    @property
    def offer_type(self) -> OfferType:
        return OfferType.FIXED

    def to_dict(self) -> dict:
        d = self._header_dict()
        d["discount_amount"] = self.discount_amount
        return d


@dataclass(frozen=True)
class BuyXGetYOffer(_OfferHeader):
    """Every complete set of min_quantity units earns free_quantity free units."""
    min_quantity: int = 1
    free_quantity: int = 1

    def __post_init__(self):
        self._check_header()
        _check_positive_int(self.min_quantity, "min_quantity")
        _check_positive_int(self.free_quantity, "free_quantity")

    @property
    def offer_type(self) -> OfferType:
        return OfferType.BUY_X_GET_Y

    def to_dict(self) -> dict:
        d = self._header_dict()
        d["min_quantity"] = self.min_quantity
        d["free_quantity"] = self.free_quantity
        return d


@dataclass(frozen=True)
class BogoOffer(_OfferHeader):
    """Buy one get one: every second unit of a line is free."""

    def __post_init__(self):
        self._check_header()

    @property
    def offer_type(self) -> OfferType:
        return OfferType.BOGO

    def to_dict(self) -> dict:
        return self._header_dict()


@dataclass(frozen=True)
class FreeShippingOffer(_OfferHeader):
    """Waives the delivery fee once the subtotal reaches min_amount."""
    min_amount: float = 0.0

    def __post_init__(self):
        self._check_header()
        _check_positive(self.min_amount, "min_amount")

    @property
    def offer_type(self) -> OfferType:
        return OfferType.FREE_SHIPPING

    def to_dict(self) -> dict:
        d = self._header_dict()
        d["min_amount"] = self.min_amount
        return d


Offer = Union[
    PercentageOffer,
    FixedAmountOffer,
    BuyXGetYOffer,
    BogoOffer,
    FreeShippingOffer,
]

OFFER_CLASSES = (
    PercentageOffer,
    FixedAmountOffer,
    BuyXGetYOffer,
    BogoOffer,
    FreeShippingOffer,
)


# ══════════════════════════════════════════════════════════════
# PRICING RESULTS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class FreeItem:
    """Units granted at zero cost by a give-away offer."""
    product: Product
    quantity: int

    def to_dict(self) -> dict:
        return {
            "product_id": self.product.product_id,
            "name": self.product.name,
            "quantity": self.quantity,
        }


@dataclass(frozen=True)
class AppliedOffer:
    """One offer's effect on the cart. discount is full precision, >= 0."""
    offer: Offer
    discount: float
    message: str
    free_items: Tuple[FreeItem, ...] = ()

    def to_dict(self) -> dict:
        return {
            "offer_id": self.offer.offer_id,
            "offer_title": self.offer.title,
            "offer_type": self.offer.offer_type.value,
            "priority": self.offer.priority,
            "discount": self.discount,
            "message": self.message,
            "free_items": [f.to_dict() for f in self.free_items],
        }


@dataclass(frozen=True)
class FreeShippingHint:
    """Advisory 'spend N more' message. Never affects pricing."""
    offer: FreeShippingOffer
    remaining: float
    message: str

    def to_dict(self) -> dict:
        return {
            "offer_id": self.offer.offer_id,
            "min_amount": self.offer.min_amount,
            "remaining": self.remaining,
            "message": self.message,
        }


@dataclass(frozen=True)
class CartCalculation:
    """
    Fully priced cart.

    Fields:
        subtotal:           Sum of line totals before any discount
        delivery_fee:       Resolved fee (0 when free shipping triggered)
        applied_offers:     Highest priority first, shipping waiver last
        total_discount:     All discounts including the shipping waiver
        total:              Payable amount, never negative
        savings:            Equal to total_discount, for "you saved" banners
        base_delivery_fee:  Fee before any waiver
        free_shipping_hint: Advisory message when close to free delivery
    """
    subtotal: float
    delivery_fee: float
    applied_offers: Tuple[AppliedOffer, ...]
    total_discount: float
    total: float
    savings: float
    base_delivery_fee: float = 0.0
    free_shipping_hint: Optional[FreeShippingHint] = None

    @property
    def is_delivery_free(self) -> bool:
        return any(
            a.offer.offer_type is OfferType.FREE_SHIPPING
            for a in self.applied_offers
        )

    @property
    def free_items(self) -> Tuple[FreeItem, ...]:
        return tuple(f for a in self.applied_offers for f in a.free_items)

    def to_dict(self) -> dict:
        return {
            "subtotal": self.subtotal,
            "delivery_fee": self.delivery_fee,
            "base_delivery_fee": self.base_delivery_fee,
            "is_delivery_free": self.is_delivery_free,
            "applied_offers": [a.to_dict() for a in self.applied_offers],
            "total_discount": self.total_discount,
            "total": self.total,
            "savings": self.savings,
            "free_shipping_hint": (
                self.free_shipping_hint.to_dict()
                if self.free_shipping_hint else None
            ),
        }
