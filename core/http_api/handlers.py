"""
Storefront HTTP API - Framework-Agnostic Handlers
==================================================
Pure handler functions over contracts and injected dependencies.
Every handler returns a response envelope dict; the adapter picks the
HTTP status from it.
"""

from __future__ import annotations

import logging
from typing import Any

from core.http_api.contracts import (
    BestOfferHttpRequest,
    CartPriceHttpRequest,
    OrderSummaryHttpRequest,
)
from core.http_api.errors import (
    DELIVERY_AREA_NOT_FOUND,
    OFFER_CATALOG_UNAVAILABLE,
    error_response,
    success_response,
)
from engines.orders.messages import build_order_message
from engines.orders.records import build_order_record
from engines.promotion.badges import offer_badge
from engines.promotion.parsing import parse_offer_catalog

logger = logging.getLogger("storefront.http")


class _HandlerFailure(Exception):
    def __init__(self, payload: dict[str, Any]):
        self.payload = payload
        super().__init__(payload["error"]["message"])


def _resolve_language(headers: dict[str, Any] | None) -> str:
    for key, value in (headers or {}).items():
        if str(key).strip().lower() != "accept-language":
            continue
        raw = str(value).strip().lower()
        if not raw:
            break
        first_segment = raw.split(",")[0]
        lang = first_segment.split(";")[0].strip()
        if lang:
            return lang
        break
    return "en"


def _success(data: Any, dependencies, headers) -> dict[str, Any]:
    settings = dependencies.config_store.get_store_settings()
    return success_response(
        data,
        meta={"lang": _resolve_language(headers), "currency": settings.currency},
    )


def _load_offers(dependencies) -> tuple:
    try:
        rows = list(dependencies.offer_source.list_offer_rows())
    except Exception as exc:
        logger.error(f"Offer catalog fetch failed: {exc}", exc_info=True)
        raise _HandlerFailure(error_response(
            code=OFFER_CATALOG_UNAVAILABLE,
            message="Offer catalog is unavailable.",
        )) from exc
    return parse_offer_catalog(rows)


def _resolve_delivery(dependencies, area_id, explicit_fee):
    """Return (area or None, base delivery fee)."""
    store = dependencies.config_store
    if area_id:
        area = store.get_delivery_area(area_id)
        if area is None:
            raise _HandlerFailure(error_response(
                code=DELIVERY_AREA_NOT_FOUND,
                message=f"Delivery area '{area_id}' not found.",
                details={"delivery_area_id": area_id},
            ))
        return area, area.delivery_fee
    if explicit_fee is not None:
        return None, float(explicit_fee)
    return None, store.get_store_settings().default_delivery_fee


# ══════════════════════════════════════════════════════════════
# CART PRICING
# ══════════════════════════════════════════════════════════════

def post_cart_price(
    request: CartPriceHttpRequest,
    dependencies,
    *,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    try:
        offers = _load_offers(dependencies)
        _, fee = _resolve_delivery(
            dependencies, request.delivery_area_id, request.delivery_fee,
        )
    except _HandlerFailure as failure:
        return failure.payload

    calculation = dependencies.pricing_service.calculate_cart(
        request.lines, offers, fee,
    )
    return _success(calculation.to_dict(), dependencies, headers)


def post_best_offer(
    request: BestOfferHttpRequest,
    dependencies,
    *,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    try:
        offers = _load_offers(dependencies)
    except _HandlerFailure as failure:
        return failure.payload

    service = dependencies.pricing_service
    currency = dependencies.config_store.get_store_settings().currency
    best = service.best_offer_for_product(request.product, offers)
    product_offers = service.offers_for_product(request.product, offers)
    return _success(
        {
            "product_id": request.product.product_id,
            "best_offer": best.to_dict() if best else None,
            "badge": offer_badge(best, currency=currency).to_dict() if best else None,
            "offers": [o.to_dict() for o in product_offers],
        },
        dependencies,
        headers,
    )


# ══════════════════════════════════════════════════════════════
# CHECKOUT SUMMARY
# ══════════════════════════════════════════════════════════════

def post_order_summary(
    request: OrderSummaryHttpRequest,
    dependencies,
    *,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Price the cart and build the order record and summary message.

    Persisting the record and sending the message are left to the
    caller.
    """
    try:
        offers = _load_offers(dependencies)
        area, fee = _resolve_delivery(dependencies, request.delivery_area_id, None)
    except _HandlerFailure as failure:
        return failure.payload

    settings = dependencies.config_store.get_store_settings()
    now = dependencies.clock.now_utc()
    order_number = dependencies.order_numbers.new_order_number(now)

    calculation = dependencies.pricing_service.calculate_cart(
        request.lines, offers, fee,
    )
    record = build_order_record(
        calculation,
        request.lines,
        customer_name=request.customer_name,
        customer_phone=request.customer_phone,
        delivery_area=area,
        notes=request.notes,
        user_id=request.user_id,
        order_number=order_number,
    )
    message = build_order_message(
        calculation,
        request.lines,
        order_number=order_number,
        customer_name=request.customer_name,
        delivery_area=area,
        notes=request.notes,
        placed_at=now,
        settings=settings,
    )
    logger.info(
        f"Order summary {order_number}: {len(request.lines)} lines, "
        f"total {calculation.total:.2f}"
    )
    return _success(
        {
            "order_number": order_number,
            "calculation": calculation.to_dict(),
            "record": record.to_dict(),
            "message": message,
        },
        dependencies,
        headers,
    )


# ══════════════════════════════════════════════════════════════
# DELIVERY AREAS
# ══════════════════════════════════════════════════════════════

def list_delivery_areas(
    dependencies,
    *,
    headers: dict[str, Any] | None = None,
) -> dict[str, Any]:
    areas = dependencies.config_store.list_delivery_areas()
    return _success([a.to_dict() for a in areas], dependencies, headers)
