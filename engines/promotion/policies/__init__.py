"""
Storefront Promotion Engine — Policies
========================================
Eligibility predicates evaluated before any discount is computed:

- Validity gate: is the offer live at `now`?
- Applicability filter: does the offer cover this product/category?

Applicability is evaluated per cart line, never per cart: one offer
may cover some lines and not others.
"""

from __future__ import annotations

from datetime import datetime

from core.primitives.catalog import CartLine
from engines.promotion.models import Offer


def is_offer_valid(offer: Offer, now: datetime) -> bool:
    """
    An offer is valid when it is active and `now` lies inside its window.

    Window bounds are inclusive: an offer is still valid at exactly
    its end_date. A naive `now` is read as UTC.
    """
    return offer.is_active and offer.window.contains(now)


def is_offer_applicable(offer: Offer, product_id: str, category_id: str) -> bool:
    scope = offer.scope
    if scope.is_universal:
        return True
    if product_id in scope.products:
        return True
    if category_id in scope.categories:
        return True
    return False


def is_offer_applicable_to_line(offer: Offer, line: CartLine) -> bool:
    return is_offer_applicable(offer, line.product_id, line.category_id)
