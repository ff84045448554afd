"""
Storefront Catalog Primitive — Products, Variants, Cart Lines
==============================================================
Engine: Core Primitives
Authority: read-only snapshots of the products table

The catalog primitive is the product/cart abstraction consumed by:
Promotion Engine (pricing), Orders (record + message building).

RULES:
- Products and cart lines are immutable snapshots
- Prices are plain floating currency, display rounding happens
  at presentation time only
- A cart line always has quantity >= 1
- Effective unit price = variant price if a variant is selected,
  else product base price

This file contains NO persistence logic.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional


# ══════════════════════════════════════════════════════════════
# INPUT BOUNDARY COERCION
# ══════════════════════════════════════════════════════════════

def coerce_amount(value: Any) -> float:
    """
    Coerce a raw numeric field into a finite, non-negative float.

    None, non-numeric values, NaN, infinities and negatives all
    become 0.0 so that nothing non-finite reaches a total.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(amount) or amount < 0:
        return 0.0
    return amount


def _check_price(value: float, field_name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{field_name} must be a number.")
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"{field_name} must be a finite amount >= 0, got {value}.")


# ══════════════════════════════════════════════════════════════
# PRODUCT VARIANT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ProductVariant:
    """A purchasable size/weight option carrying its own price."""

    variant_id: str
    label: str
    price: float

    def __post_init__(self):
        if not self.variant_id or not isinstance(self.variant_id, str):
            raise ValueError("variant_id must be non-empty string.")
        _check_price(self.price, "variant price")

    def to_dict(self) -> dict:
        return {"id": self.variant_id, "label": self.label, "price": self.price}


# ══════════════════════════════════════════════════════════════
# PRODUCT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Product:
    """
    Product snapshot as seen by pricing.

    Fields:
        product_id:   Unique identifier
        category_id:  Owning category ("" when uncategorised)
        base_price:   Unit price when no variant is selected
        name:         Display name (order messages only)
        unit:         Display unit, e.g. "kg" (order messages only)
    """
    product_id: str
    category_id: str
    base_price: float
    name: str = ""
    unit: str = ""

    def __post_init__(self):
        if not self.product_id or not isinstance(self.product_id, str):
            raise ValueError("product_id must be non-empty string.")
        if not isinstance(self.category_id, str):
            raise ValueError("category_id must be a string.")
        _check_price(self.base_price, "base_price")

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "category_id": self.category_id,
            "base_price": self.base_price,
            "name": self.name,
            "unit": self.unit,
        }


# ══════════════════════════════════════════════════════════════
# CART LINE
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CartLine:
    """One product (optionally a specific variant) and its quantity."""

    product: Product
    quantity: int
    variant: Optional[ProductVariant] = None

    def __post_init__(self):
        if not isinstance(self.product, Product):
            raise TypeError("product must be Product.")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise TypeError("quantity must be int.")
        if self.quantity < 1:
            raise ValueError(f"quantity must be >= 1, got {self.quantity}.")
        if self.variant is not None and not isinstance(self.variant, ProductVariant):
            raise TypeError("variant must be ProductVariant or None.")

    @property
    def product_id(self) -> str:
        return self.product.product_id

    @property
    def category_id(self) -> str:
        return self.product.category_id

    @property
    def unit_price(self) -> float:
        if self.variant is not None:
            return self.variant.price
        return self.product.base_price

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity

    @property
    def display_label(self) -> str:
        """Variant label, falling back to the product unit."""
        if self.variant is not None and self.variant.label:
            return self.variant.label
        return self.product.unit

    def to_dict(self) -> dict:
        return {
            "product": self.product.to_dict(),
            "quantity": self.quantity,
            "variant": self.variant.to_dict() if self.variant else None,
            "unit_price": self.unit_price,
            "line_total": self.line_total,
        }


def cart_line_from_dict(data: Mapping[str, Any]) -> CartLine:
    """
    Build a CartLine from a JSON-ish mapping.

    Expected keys: product_id, category_id, price, quantity and
    optionally name, unit, variant {id, label, price}.

    Raises:
        ValueError: On a missing product id or a non-positive quantity.
    """
    product_id = data.get("product_id")
    if not product_id:
        raise ValueError("product_id is required.")

    raw_quantity = data.get("quantity")
    try:
        quantity = int(raw_quantity)
    except (TypeError, ValueError) as exc:
        raise ValueError("quantity must be an integer.") from exc
    if quantity < 1:
        raise ValueError(f"quantity must be >= 1, got {quantity}.")

    product = Product(
        product_id=str(product_id),
        category_id=str(data.get("category_id") or ""),
        base_price=coerce_amount(data.get("price")),
        name=str(data.get("name") or ""),
        unit=str(data.get("unit") or ""),
    )

    variant = None
    raw_variant = data.get("variant")
    if raw_variant:
        if not isinstance(raw_variant, Mapping):
            raise ValueError("variant must be an object.")
        variant = ProductVariant(
            variant_id=str(raw_variant.get("id") or ""),
            label=str(raw_variant.get("label") or ""),
            price=coerce_amount(raw_variant.get("price")),
        )

    return CartLine(product=product, quantity=quantity, variant=variant)
