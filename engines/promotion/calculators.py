"""
Storefront Promotion Engine — Discount Calculators
====================================================
One calculator per line-level offer kind. Each takes an offer and
the cart lines and returns an AppliedOffer, or None when the offer
has no effect on this cart. None is the normal "skip" signal, never
an error.

Free shipping is not here: it compares against the cart subtotal and
waives the delivery fee (see engines.promotion.shipping).

Amounts keep full float precision. Rounding is a display concern.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional, Sequence

from core.primitives.catalog import CartLine
from engines.promotion.errors import UnsupportedOfferTypeError
from engines.promotion.models import (
    AppliedOffer,
    BogoOffer,
    BuyXGetYOffer,
    FixedAmountOffer,
    FreeItem,
    Offer,
    OfferType,
    PercentageOffer,
)
from engines.promotion.policies import is_offer_applicable_to_line

DEFAULT_CURRENCY = "EGP"


def _fmt(value: float) -> str:
    """12.0 -> '12', 12.5 -> '12.5' (offer configuration values)."""
    return f"{value:g}"


# ══════════════════════════════════════════════════════════════
# PERCENTAGE / CATEGORY DISCOUNT
# ══════════════════════════════════════════════════════════════

def calculate_percentage_discount(
    offer: PercentageOffer,
    lines: Sequence[CartLine],
    currency: str = DEFAULT_CURRENCY,
) -> Optional[AppliedOffer]:
    discount = 0.0
    matched = False
    for line in lines:
        if is_offer_applicable_to_line(offer, line):
            matched = True
            discount += line.line_total * (offer.discount_percentage / 100)

    if not matched or discount == 0:
        return None

    return AppliedOffer(
        offer=offer,
        discount=discount,
        message=(
            f"{_fmt(offer.discount_percentage)}% off - "
            f"you saved {discount:.2f} {currency}"
        ),
    )


# ══════════════════════════════════════════════════════════════
# FIXED AMOUNT
# ══════════════════════════════════════════════════════════════

def calculate_fixed_discount(
    offer: FixedAmountOffer,
    lines: Sequence[CartLine],
    currency: str = DEFAULT_CURRENCY,
) -> Optional[AppliedOffer]:
    """Once per cart, regardless of quantities or line values."""
    if not any(is_offer_applicable_to_line(offer, line) for line in lines):
        return None

    return AppliedOffer(
        offer=offer,
        discount=offer.discount_amount,
        message=f"{_fmt(offer.discount_amount)} {currency} off",
    )


# ══════════════════════════════════════════════════════════════
# GIVE-AWAY OFFERS (BUY X GET Y, BOGO)
# ══════════════════════════════════════════════════════════════

def _free_units(
    offer,
    lines: Sequence[CartLine],
    free_qty_for: Callable[[int], int],
) -> tuple[float, tuple[FreeItem, ...]]:
    discount = 0.0
    free_items = []
    for line in lines:
        if not is_offer_applicable_to_line(offer, line):
            continue
        free_qty = free_qty_for(line.quantity)
        if free_qty > 0:
            free_items.append(FreeItem(product=line.product, quantity=free_qty))
            discount += line.unit_price * free_qty
    return discount, tuple(free_items)


def calculate_buy_x_get_y(
    offer: BuyXGetYOffer,
    lines: Sequence[CartLine],
    currency: str = DEFAULT_CURRENCY,
) -> Optional[AppliedOffer]:
    def free_qty_for(quantity: int) -> int:
        complete_sets = quantity // offer.min_quantity
        return complete_sets * offer.free_quantity

    discount, free_items = _free_units(offer, lines, free_qty_for)
    if not free_items:
        return None

    return AppliedOffer(
        offer=offer,
        discount=discount,
        message=f"Buy {offer.min_quantity} get {offer.free_quantity} free",
        free_items=free_items,
    )


def calculate_bogo(
    offer: BogoOffer,
    lines: Sequence[CartLine],
    currency: str = DEFAULT_CURRENCY,
) -> Optional[AppliedOffer]:
    """Fixed 2-for-1 ratio."""
    discount, free_items = _free_units(offer, lines, lambda quantity: quantity // 2)
    if not free_items:
        return None

    return AppliedOffer(
        offer=offer,
        discount=discount,
        message="Buy one get one free",
        free_items=free_items,
    )


# ══════════════════════════════════════════════════════════════
# DISPATCH
# ══════════════════════════════════════════════════════════════

OFFER_CALCULATORS: Dict[OfferType, Callable[..., Optional[AppliedOffer]]] = {
    OfferType.PERCENTAGE: calculate_percentage_discount,
    OfferType.CATEGORY_DISCOUNT: calculate_percentage_discount,
    OfferType.FIXED: calculate_fixed_discount,
    OfferType.BUY_X_GET_Y: calculate_buy_x_get_y,
    OfferType.BOGO: calculate_bogo,
}

LINE_OFFER_TYPES = frozenset(OfferType) - {OfferType.FREE_SHIPPING}

_missing = LINE_OFFER_TYPES - set(OFFER_CALCULATORS)
if _missing:
    raise RuntimeError(
        f"Offer types without a calculator: {sorted(t.value for t in _missing)}"
    )


def apply_offer(
    offer: Offer,
    lines: Sequence[CartLine],
    currency: str = DEFAULT_CURRENCY,
) -> Optional[AppliedOffer]:
    """
    Run the calculator registered for the offer's type.

    Raises:
        UnsupportedOfferTypeError: If no calculator handles the type
            (free shipping, or a type added without a calculator).
    """
    calculator = OFFER_CALCULATORS.get(offer.offer_type)
    if calculator is None:
        raise UnsupportedOfferTypeError(offer.offer_type)
    return calculator(offer, lines, currency)
