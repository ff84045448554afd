"""
Storefront Promotion Engine — Pricing Service
===============================================
Turns cart lines plus the offer catalog into a priced cart.

Pure functions over immutable inputs: no I/O, no state across calls,
inputs are never mutated. The caller supplies a consistent
(lines, offers, delivery fee) snapshot; validity is re-derived here
rather than trusting a pre-filtered catalog.

Discounts stack: every qualifying auto-apply offer is applied and
summed. Priority only orders the applied offers for display.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from core.config.rules import StoreSettings
from core.primitives.catalog import CartLine, Product, coerce_amount
from core.time.clock import Clock, as_utc, get_default_clock, resolve_now
from engines.promotion.calculators import apply_offer
from engines.promotion.models import (
    AppliedOffer,
    CartCalculation,
    Offer,
    OfferType,
)
from engines.promotion.policies import is_offer_applicable, is_offer_valid
from engines.promotion.shipping import (
    free_shipping_candidates,
    resolve_free_shipping,
)

logger = logging.getLogger("storefront.promotion")


def _by_priority(items, key=lambda o: o):
    """Highest priority first; equal priorities keep input order."""
    return sorted(items, key=lambda item: -key(item).priority)


def _finite_or_zero(value: float) -> float:
    return value if math.isfinite(value) else 0.0


# ══════════════════════════════════════════════════════════════
# CART AGGREGATOR
# ══════════════════════════════════════════════════════════════

def calculate_cart(
    lines: Sequence[CartLine],
    offers: Sequence[Offer],
    base_delivery_fee: float,
    *,
    now: Optional[datetime] = None,
    settings: Optional[StoreSettings] = None,
) -> CartCalculation:
    """
    Price a cart against the offer catalog.

    Steps:
        1. subtotal = sum of line totals
        2. keep valid, auto-apply, non-shipping offers
        3. run each offer's calculator, drop None, order by priority
        4. resolve free shipping against the subtotal
        5. total_discount = goods discounts + shipping waiver
        6. total = max(0, subtotal - goods discounts + resolved fee)

    Always returns a CartCalculation for well-typed input.
    """
    now = resolve_now(now)
    currency = (settings or StoreSettings()).currency
    base_fee = coerce_amount(base_delivery_fee)
    lines = tuple(lines)
    offers = tuple(offers)

    subtotal = _finite_or_zero(sum(line.line_total for line in lines))

    eligible = [
        o for o in offers
        if is_offer_valid(o, now)
        and o.auto_apply
        and o.offer_type is not OfferType.FREE_SHIPPING
    ]

    results = []
    for offer in eligible:
        applied = apply_offer(offer, lines, currency)
        if applied is not None:
            results.append(applied)
    applied_offers: List[AppliedOffer] = _by_priority(results, key=lambda a: a.offer)

    goods_discount = _finite_or_zero(sum(a.discount for a in applied_offers))

    shipping = resolve_free_shipping(
        offers, subtotal, base_fee, now=now, currency=currency,
    )
    delivery_fee = base_fee
    waiver = 0.0
    if shipping.is_free:
        delivery_fee = 0.0
        waiver = base_fee
        applied_offers.append(AppliedOffer(
            offer=shipping.offer,
            discount=base_fee,
            message=shipping.message or "Free delivery",
        ))

    total_discount = goods_discount + waiver
    total = max(0.0, _finite_or_zero(subtotal - goods_discount + delivery_fee))

    logger.debug(
        f"Cart priced: {len(lines)} lines, subtotal {subtotal:.2f}, "
        f"{len(applied_offers)} offers applied, discount {total_discount:.2f}, "
        f"delivery {delivery_fee:.2f}, total {total:.2f}"
    )

    return CartCalculation(
        subtotal=subtotal,
        delivery_fee=delivery_fee,
        applied_offers=tuple(applied_offers),
        total_discount=total_discount,
        total=total,
        savings=total_discount,
        base_delivery_fee=base_fee,
        free_shipping_hint=shipping.hint,
    )


# ══════════════════════════════════════════════════════════════
# PRODUCT-LEVEL QUERIES
# ══════════════════════════════════════════════════════════════

def best_offer_for_product(
    product: Product,
    offers: Iterable[Offer],
    *,
    now: Optional[datetime] = None,
) -> Optional[Offer]:
    """
    Highest-priority valid offer covering the product, or None.

    Ignores auto_apply and offer type; used for product badges.
    """
    now = resolve_now(now)
    applicable = [
        o for o in offers
        if is_offer_valid(o, now)
        and is_offer_applicable(o, product.product_id, product.category_id)
    ]
    if not applicable:
        return None
    return _by_priority(applicable)[0]


def offers_for_product(
    product: Product,
    offers: Iterable[Offer],
    *,
    now: Optional[datetime] = None,
) -> List[Offer]:
    """Every valid, applicable, non-shipping offer for a product page."""
    now = resolve_now(now)
    return _by_priority([
        o for o in offers
        if o.offer_type is not OfferType.FREE_SHIPPING
        and is_offer_valid(o, now)
        and is_offer_applicable(o, product.product_id, product.category_id)
    ])


def free_shipping_offers(
    offers: Iterable[Offer],
    *,
    now: Optional[datetime] = None,
) -> List[Offer]:
    """Valid free-shipping offers for the delivery banner."""
    now = resolve_now(now)
    return free_shipping_candidates(offers, now)


# ══════════════════════════════════════════════════════════════
# SERVICE FACADE
# ══════════════════════════════════════════════════════════════

class PricingService:
    """
    Binds a clock and store settings to the pricing functions.

    Holds no cart or catalog state; every call is independent.
    """

    def __init__(
        self,
        *,
        clock: Optional[Clock] = None,
        settings: Optional[StoreSettings] = None,
    ):
        self._clock = clock
        self._settings = settings or StoreSettings()

    def _now(self) -> datetime:
        clock = self._clock or get_default_clock()
        return as_utc(clock.now_utc())

    @property
    def settings(self) -> StoreSettings:
        return self._settings

    def calculate_cart(
        self, lines: Sequence[CartLine], offers: Sequence[Offer], base_delivery_fee: float,
    ) -> CartCalculation:
        return calculate_cart(
            lines, offers, base_delivery_fee,
            now=self._now(), settings=self._settings,
        )

    def best_offer_for_product(
        self, product: Product, offers: Iterable[Offer],
    ) -> Optional[Offer]:
        return best_offer_for_product(product, offers, now=self._now())

    def offers_for_product(self, product: Product, offers: Iterable[Offer]) -> List[Offer]:
        return offers_for_product(product, offers, now=self._now())

    def free_shipping_offers(self, offers: Iterable[Offer]) -> List[Offer]:
        return free_shipping_offers(offers, now=self._now())
