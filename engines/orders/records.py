"""
Storefront Orders — Order Records
===================================
Flattens a priced cart into the rows the persistence routine writes
(orders, order_items, applied offers). Pure: builds dicts, performs
no I/O. Amounts are copied from the CartCalculation, never recomputed.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Sequence, Tuple

from core.config.rules import DeliveryArea
from core.primitives.catalog import CartLine
from engines.promotion.models import CartCalculation

logger = logging.getLogger("storefront.orders")

ORDER_NUMBER_PREFIX = "MZQ"
ORDER_STATUS_PENDING = "pending"
DEFAULT_CUSTOMER_NAME = "New customer"


# ══════════════════════════════════════════════════════════════
# ORDER NUMBERS
# ══════════════════════════════════════════════════════════════

def generate_order_number(
    now: datetime, rng: Optional[random.Random] = None,
) -> str:
    """MZQ + YYMMDD + 4 random digits, e.g. MZQ2603010042."""
    rng = rng or random.Random()
    suffix = f"{rng.randrange(10000):04d}"
    return f"{ORDER_NUMBER_PREFIX}{now:%y%m%d}{suffix}"


def format_order_number(value: Optional[str]) -> str:
    if not value:
        return "N/A"
    if value.startswith(ORDER_NUMBER_PREFIX):
        return value
    return f"ORD-{value[:8].upper()}"


# ══════════════════════════════════════════════════════════════
# ORDER RECORD
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class OrderRecord:
    """Rows for the orders / order_items tables plus applied offers."""
    order: Dict[str, Any]
    items: Tuple[Dict[str, Any], ...]
    applied_offers: Tuple[Dict[str, Any], ...]

    def to_dict(self) -> dict:
        return {
            "order": dict(self.order),
            "items": [dict(i) for i in self.items],
            "applied_offers": [dict(a) for a in self.applied_offers],
        }


def _item_row(line: CartLine) -> dict:
    return {
        "product_id": line.product_id,
        "product_name": line.product.name,
        "size_label": line.variant.label if line.variant else None,
        "quantity": line.quantity,
        "unit_price": line.unit_price,
        "total_price": line.line_total,
    }


def build_order_record(
    calculation: CartCalculation,
    lines: Sequence[CartLine],
    *,
    customer_name: str = "",
    customer_phone: str = "",
    delivery_area: Optional[DeliveryArea] = None,
    notes: str = "",
    user_id: Optional[str] = None,
    order_number: Optional[str] = None,
) -> OrderRecord:
    """
    Build the persistence payload for a checked-out cart.

    user_id is None for guest checkouts.
    """
    order = {
        "order_number": order_number,
        "user_id": user_id or None,
        "customer_name": customer_name or DEFAULT_CUSTOMER_NAME,
        "customer_phone": customer_phone or "",
        "customer_address": delivery_area.label if delivery_area else "",
        "customer_city": delivery_area.city if delivery_area else "",
        "status": ORDER_STATUS_PENDING,
        "subtotal": calculation.subtotal,
        "delivery_fee": calculation.delivery_fee,
        "discount": calculation.total_discount,
        "total": calculation.total,
        "notes": notes or None,
    }
    applied = tuple(
        {
            "offer_title": a.offer.title,
            "discount": a.discount,
            "message": a.message,
        }
        for a in calculation.applied_offers
    )
    record = OrderRecord(
        order=order,
        items=tuple(_item_row(line) for line in lines),
        applied_offers=applied,
    )
    logger.debug(
        f"Order record built: {len(record.items)} items, "
        f"{len(applied)} offers, total {calculation.total:.2f}"
    )
    return record
