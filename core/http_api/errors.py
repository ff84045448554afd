"""
Storefront HTTP API - Error Mapping
====================================
Stable transport envelopes for handler results and failures.
"""

from __future__ import annotations

from typing import Any, Optional

from core.http_api.contracts import HttpApiErrorBody, HttpApiResponse

INVALID_REQUEST = "INVALID_REQUEST"
METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
DELIVERY_AREA_NOT_FOUND = "DELIVERY_AREA_NOT_FOUND"
OFFER_CATALOG_UNAVAILABLE = "OFFER_CATALOG_UNAVAILABLE"

HTTP_STATUS_BY_CODE = {
    INVALID_REQUEST: 400,
    DELIVERY_AREA_NOT_FOUND: 404,
    METHOD_NOT_ALLOWED: 405,
    OFFER_CATALOG_UNAVAILABLE: 503,
}


def error_response(
    *,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(
        ok=False,
        error=HttpApiErrorBody(
            code=code,
            message=message,
            details=details or {},
        ),
    ).to_dict()


def success_response(
    data: Any,
    *,
    meta: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(ok=True, data=data, meta=meta).to_dict()


def status_for(payload: dict[str, Any]) -> int:
    """HTTP status for a handler payload (200 on success)."""
    if payload.get("ok"):
        return 200
    code = payload.get("error", {}).get("code")
    return HTTP_STATUS_BY_CODE.get(code, 500)
