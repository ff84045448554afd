"""
Storefront Django Adapter Views
================================
Pass-through HTTP views over core/http_api handlers.
"""

from __future__ import annotations

import json
import math
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.wiring import build_dependencies
from core.http_api.contracts import (
    BestOfferHttpRequest,
    CartPriceHttpRequest,
    OrderSummaryHttpRequest,
)
from core.http_api.errors import (
    INVALID_REQUEST,
    METHOD_NOT_ALLOWED,
    error_response,
    status_for,
)
from core.http_api.handlers import (
    list_delivery_areas,
    post_best_offer,
    post_cart_price,
    post_order_summary,
)
from core.primitives.catalog import Product, cart_line_from_dict, coerce_amount


def _headers_from_request(request: HttpRequest) -> dict[str, str]:
    return {str(key): str(value) for key, value in request.headers.items()}


def _json_error(code: str, message: str, status: int = 400) -> JsonResponse:
    return JsonResponse(
        error_response(code=code, message=message, details={}),
        status=status,
    )


def _respond(payload: dict[str, Any]) -> JsonResponse:
    return JsonResponse(payload, status=status_for(payload))


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        parsed = json.loads(request.body.decode("utf-8"))
    except Exception as exc:
        raise ValueError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Request body must be a JSON object.")
    return parsed


def _parse_lines(body: dict[str, Any]) -> tuple:
    raw_lines = body.get("lines", [])
    if not isinstance(raw_lines, list):
        raise ValueError("lines must be a list.")
    lines = []
    for raw in raw_lines:
        if not isinstance(raw, dict):
            raise ValueError("each line must be an object.")
        lines.append(cart_line_from_dict(raw))
    return tuple(lines)


def _parse_optional_fee(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("delivery_fee must be a number.")
    try:
        fee = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError("delivery_fee must be a number.") from exc
    if not math.isfinite(fee) or fee < 0:
        raise ValueError("delivery_fee must be a finite amount >= 0.")
    return fee


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _cart_price_contract(body):
    return CartPriceHttpRequest(
        lines=_parse_lines(body),
        delivery_area_id=_optional_str(body.get("delivery_area_id")),
        delivery_fee=_parse_optional_fee(body.get("delivery_fee")),
    )


def _best_offer_contract(body):
    product_id = body.get("product_id")
    if not product_id:
        raise ValueError("product_id is required.")
    return BestOfferHttpRequest(
        product=Product(
            product_id=str(product_id),
            category_id=str(body.get("category_id") or ""),
            base_price=coerce_amount(body.get("price")),
            name=str(body.get("name") or ""),
        )
    )


def _order_summary_contract(body):
    return OrderSummaryHttpRequest(
        lines=_parse_lines(body),
        delivery_area_id=_optional_str(body.get("delivery_area_id")),
        customer_name=str(body.get("customer_name") or ""),
        customer_phone=str(body.get("customer_phone") or ""),
        notes=str(body.get("notes") or ""),
        user_id=_optional_str(body.get("user_id")),
    )


def _dispatch_post(handler, contract_factory, request: HttpRequest) -> JsonResponse:
    headers = _headers_from_request(request)
    try:
        body = _parse_json_body(request)
        contract = contract_factory(body)
    except (ValueError, TypeError, KeyError) as exc:
        return _json_error(INVALID_REQUEST, str(exc), status=400)

    payload = handler(contract, build_dependencies(), headers=headers)
    return _respond(payload)


def _method_not_allowed() -> JsonResponse:
    return _json_error(
        METHOD_NOT_ALLOWED,
        "Method not allowed for this endpoint.",
        status=405,
    )


@csrf_exempt
def cart_price_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_post(post_cart_price, _cart_price_contract, request)


@csrf_exempt
def best_offer_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_post(post_best_offer, _best_offer_contract, request)


@csrf_exempt
def order_summary_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_post(post_order_summary, _order_summary_contract, request)


def delivery_areas_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    payload = list_delivery_areas(
        build_dependencies(), headers=_headers_from_request(request),
    )
    return _respond(payload)
