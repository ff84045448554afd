"""
Storefront Orders — Order Summary Message
===========================================
Human-readable order summary sent to the store for manual
confirmation (chat message). Built only from CartCalculation fields
and the cart lines; amounts are rounded for display here and nowhere
else.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Sequence

from core.config.rules import DeliveryArea, StoreSettings
from core.primitives.catalog import CartLine
from engines.promotion.models import CartCalculation

PAYMENT_METHOD_LINE = "Payment: cash on delivery"
SEPARATOR = "━" * 20


def _product_lines(lines: Sequence[CartLine], money) -> List[str]:
    out = []
    for index, line in enumerate(lines, start=1):
        label = line.display_label
        label_text = f" - {label}" if label else ""
        out.append(
            f"{index}. {line.product.name}{label_text} × {line.quantity}"
            f" = {money(line.line_total)}"
        )
    return out


def build_order_message(
    calculation: CartCalculation,
    lines: Sequence[CartLine],
    *,
    order_number: str,
    customer_name: str = "",
    delivery_area: Optional[DeliveryArea] = None,
    notes: str = "",
    placed_at: Optional[datetime] = None,
    settings: Optional[StoreSettings] = None,
) -> str:
    settings = settings or StoreSettings()
    money = settings.format_money

    parts = [f"🛒 New order from {settings.store_name}", ""]
    parts.append(f"Order number: {order_number}")
    if customer_name:
        parts.append(f"Customer: {customer_name}")
    parts.append("")

    parts.append("📦 Products:")
    parts.extend(_product_lines(lines, money))
    for free_item in calculation.free_items:
        parts.append(f"🎁 {free_item.product.name} × {free_item.quantity} (free!)")
    parts.append("")

    area_text = delivery_area.label if delivery_area else "not specified"
    parts.append(f"📍 Delivery area: {area_text}")
    fee_text = f"🚚 Delivery fee: {money(calculation.delivery_fee)}"
    if calculation.delivery_fee == 0 and calculation.base_delivery_fee > 0:
        fee_text += " (free 🎉)"
    parts.append(fee_text)
    parts.append("")

    parts.append(f"💰 Subtotal: {money(calculation.subtotal)}")
    if calculation.total_discount > 0:
        parts.append(f"💚 Total discount: {money(calculation.total_discount)}")
    parts.append(f"💵 Total: {money(calculation.total)}")
    if calculation.savings > 0:
        parts.append(f"✨ You saved: {money(calculation.savings)}")
    parts.append("")
    parts.append(PAYMENT_METHOD_LINE)

    if calculation.applied_offers:
        parts.append("")
        parts.append("🎉 Applied offers:")
        parts.extend(f"- {a.message}" for a in calculation.applied_offers)

    if notes:
        parts.append("")
        parts.append(f"📝 Notes: {notes}")

    if placed_at is not None:
        parts.append("")
        parts.append(SEPARATOR)
        parts.append(f"Order date: {placed_at:%Y-%m-%d %H:%M}")

    return "\n".join(parts).strip()
