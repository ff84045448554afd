"""
Storefront HTTP API - Contracts
================================
Framework-agnostic request/response DTOs for checkout endpoints.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Optional

from core.primitives.catalog import CartLine, Product


def _check_lines(lines) -> None:
    if not isinstance(lines, tuple):
        raise ValueError("lines must be a tuple.")
    for line in lines:
        if not isinstance(line, CartLine):
            raise ValueError("lines must contain CartLine values.")


@dataclass(frozen=True)
class CartPriceHttpRequest:
    """
    Price a cart. The delivery fee comes from delivery_area_id when
    given, else from delivery_fee, else from the store default.
    """
    lines: tuple[CartLine, ...]
    delivery_area_id: Optional[str] = None
    delivery_fee: Optional[float] = None

    def __post_init__(self):
        _check_lines(self.lines)
        if self.delivery_area_id is not None and not isinstance(self.delivery_area_id, str):
            raise ValueError("delivery_area_id must be a string or None.")
        if self.delivery_fee is not None:
            if isinstance(self.delivery_fee, bool) or not isinstance(self.delivery_fee, (int, float)):
                raise ValueError("delivery_fee must be a number or None.")
            if not math.isfinite(self.delivery_fee) or self.delivery_fee < 0:
                raise ValueError("delivery_fee must be a finite amount >= 0.")


@dataclass(frozen=True)
class BestOfferHttpRequest:
    product: Product

    def __post_init__(self):
        if not isinstance(self.product, Product):
            raise ValueError("product must be Product.")


@dataclass(frozen=True)
class OrderSummaryHttpRequest:
    lines: tuple[CartLine, ...]
    delivery_area_id: Optional[str] = None
    customer_name: str = ""
    customer_phone: str = ""
    notes: str = ""
    user_id: Optional[str] = None

    def __post_init__(self):
        _check_lines(self.lines)
        if not self.lines:
            raise ValueError("lines must not be empty.")
        if self.delivery_area_id is not None and not isinstance(self.delivery_area_id, str):
            raise ValueError("delivery_area_id must be a string or None.")


@dataclass(frozen=True)
class HttpApiErrorBody:
    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class HttpApiResponse:
    ok: bool
    data: Any = None
    error: Optional[HttpApiErrorBody] = None
    meta: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            payload = {"ok": True, "data": self.data}
            if self.meta is not None:
                payload["meta"] = dict(self.meta)
            return payload
        if self.error is None:
            raise ValueError("error must be set when ok is False.")
        return {"ok": False, "error": self.error.to_dict()}
