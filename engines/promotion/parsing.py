"""
Storefront Promotion Engine — Offer Catalog Boundary
======================================================
Converts rows from the offers table into typed offer variants.

Every numeric field passes through coerce_amount, so NaN, negatives
and garbage never reach a calculator. A row whose type is unknown or
whose type-required field is missing is malformed: parse_offer_catalog
logs it and leaves it out. A broken offer must never block checkout.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Tuple

from core.primitives.catalog import coerce_amount
from core.time.temporal import OfferWindow, parse_timestamp
from engines.promotion.errors import MalformedOfferError
from engines.promotion.models import (
    BogoOffer,
    BuyXGetYOffer,
    FixedAmountOffer,
    FreeShippingOffer,
    OfferScope,
    OfferType,
    PercentageOffer,
)

logger = logging.getLogger("storefront.promotion")


def _id_set(value: Any) -> frozenset:
    if not value:
        return frozenset()
    if isinstance(value, str):
        return frozenset({value})
    return frozenset(str(v) for v in value if v)


def _int_or_zero(value: Any) -> int:
    return int(coerce_amount(value))


def _priority(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _flag(value: Any, default: bool) -> bool:
    if value is None:
        return default
    return bool(value)


def offer_from_row(row: Mapping[str, Any]):
    """
    Build the offer variant matching row["type"].

    Raises:
        MalformedOfferError: Unknown type, missing/invalid required
            field, or an unusable time window.
    """
    offer_id = str(row.get("id") or "")
    if not offer_id:
        raise MalformedOfferError("<missing>", "id is required")

    raw_type = row.get("type")
    try:
        offer_type = OfferType(raw_type)
    except ValueError:
        raise MalformedOfferError(offer_id, f"unknown offer type '{raw_type}'")

    try:
        window = OfferWindow(
            start=parse_timestamp(row.get("start_date")),
            end=parse_timestamp(row.get("end_date")),
        )
    except ValueError as exc:
        raise MalformedOfferError(offer_id, str(exc)) from exc

    header = dict(
        offer_id=offer_id,
        title=str(row.get("title_ar") or row.get("title") or ""),
        priority=_priority(row.get("priority")),
        is_active=_flag(row.get("is_active"), True),
        auto_apply=_flag(row.get("auto_apply"), True),
        window=window,
        scope=OfferScope(
            products=_id_set(row.get("applicable_products")),
            categories=_id_set(row.get("applicable_categories")),
        ),
        description=str(row.get("description") or ""),
    )

    try:
        if offer_type in (OfferType.PERCENTAGE, OfferType.CATEGORY_DISCOUNT):
            percentage = coerce_amount(row.get("discount_percentage"))
            if percentage <= 0:
                raise MalformedOfferError(offer_id, "discount_percentage is required")
            return PercentageOffer(
                discount_percentage=percentage, offer_type=offer_type, **header,
            )

        if offer_type is OfferType.FIXED:
            amount = coerce_amount(row.get("discount_amount"))
            if amount <= 0:
                raise MalformedOfferError(offer_id, "discount_amount is required")
            return FixedAmountOffer(discount_amount=amount, **header)

        if offer_type is OfferType.BUY_X_GET_Y:
            min_quantity = _int_or_zero(row.get("min_quantity"))
            free_quantity = _int_or_zero(row.get("free_quantity"))
            if min_quantity < 1 or free_quantity < 1:
                raise MalformedOfferError(
                    offer_id, "min_quantity and free_quantity are required",
                )
            return BuyXGetYOffer(
                min_quantity=min_quantity, free_quantity=free_quantity, **header,
            )

        if offer_type is OfferType.BOGO:
            return BogoOffer(**header)

        if offer_type is OfferType.FREE_SHIPPING:
            min_amount = coerce_amount(row.get("min_amount"))
            if min_amount <= 0:
                raise MalformedOfferError(offer_id, "min_amount is required")
            return FreeShippingOffer(min_amount=min_amount, **header)

    except (TypeError, ValueError) as exc:
        raise MalformedOfferError(offer_id, str(exc)) from exc

    raise MalformedOfferError(offer_id, f"unhandled offer type '{offer_type.value}'")


def parse_offer_catalog(rows: Iterable[Mapping[str, Any]]) -> Tuple:
    """Parse rows in order, skipping (and logging) malformed ones."""
    offers = []
    for row in rows:
        try:
            offers.append(offer_from_row(row))
        except MalformedOfferError as exc:
            logger.warning(
                f"Skipping offer '{exc.offer_id}': {exc.reason}"
            )
    return tuple(offers)
