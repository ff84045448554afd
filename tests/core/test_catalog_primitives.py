"""
Tests for core.primitives.catalog — products, variants, cart lines.
"""

import math

import pytest

from core.primitives.catalog import (
    CartLine,
    Product,
    ProductVariant,
    cart_line_from_dict,
    coerce_amount,
)


def make_product(**overrides):
    data = dict(product_id="p1", category_id="c1", base_price=50.0, name="Dates", unit="kg")
    data.update(overrides)
    return Product(**data)


class TestCoerceAmount:
    @pytest.mark.parametrize("raw", [None, True, "abc", math.nan, math.inf, -5, [1]])
    def test_unusable_values_become_zero(self, raw):
        assert coerce_amount(raw) == 0.0

    def test_numeric_strings_and_ints(self):
        assert coerce_amount("12.5") == 12.5
        assert coerce_amount(3) == 3.0


class TestProduct:
    def test_rejects_empty_id(self):
        with pytest.raises(ValueError, match="product_id"):
            make_product(product_id="")

    def test_rejects_negative_price(self):
        with pytest.raises(ValueError, match="base_price"):
            make_product(base_price=-1.0)

    def test_rejects_nan_price(self):
        with pytest.raises(ValueError):
            make_product(base_price=math.nan)


class TestCartLine:
    def test_base_price_without_variant(self):
        line = CartLine(product=make_product(), quantity=3)
        assert line.unit_price == 50.0
        assert line.line_total == 150.0
        assert line.display_label == "kg"

    def test_variant_price_wins(self):
        variant = ProductVariant(variant_id="v1", label="500g", price=30.0)
        line = CartLine(product=make_product(), quantity=2, variant=variant)
        assert line.unit_price == 30.0
        assert line.line_total == 60.0
        assert line.display_label == "500g"

    def test_zero_priced_variant_still_wins(self):
        variant = ProductVariant(variant_id="v0", label="sample", price=0.0)
        line = CartLine(product=make_product(), quantity=2, variant=variant)
        assert line.line_total == 0.0

    def test_rejects_zero_quantity(self):
        with pytest.raises(ValueError, match="quantity must be >= 1"):
            CartLine(product=make_product(), quantity=0)

    def test_rejects_non_int_quantity(self):
        with pytest.raises(TypeError):
            CartLine(product=make_product(), quantity=1.5)
        with pytest.raises(TypeError):
            CartLine(product=make_product(), quantity=True)

    def test_frozen_immutability(self):
        line = CartLine(product=make_product(), quantity=1)
        with pytest.raises(AttributeError):
            line.quantity = 5


class TestCartLineFromDict:
    def test_full_payload(self):
        line = cart_line_from_dict({
            "product_id": "p9",
            "category_id": "nuts",
            "price": "80",
            "quantity": "2",
            "name": "Almonds",
            "variant": {"id": "v1", "label": "250g", "price": 25},
        })
        assert line.product_id == "p9"
        assert line.category_id == "nuts"
        assert line.quantity == 2
        assert line.unit_price == 25.0

    def test_garbage_price_becomes_zero(self):
        line = cart_line_from_dict({"product_id": "p1", "price": "NaN", "quantity": 1})
        assert line.unit_price == 0.0

    def test_missing_product_id(self):
        with pytest.raises(ValueError, match="product_id is required"):
            cart_line_from_dict({"quantity": 1})

    def test_bad_quantity(self):
        with pytest.raises(ValueError, match="quantity"):
            cart_line_from_dict({"product_id": "p1", "quantity": "many"})
        with pytest.raises(ValueError, match="quantity must be >= 1"):
            cart_line_from_dict({"product_id": "p1", "quantity": 0})
