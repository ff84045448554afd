"""Storefront order records and order numbers."""

import random
from datetime import datetime, timezone

import pytest

from core.config.rules import DeliveryArea
from core.primitives.catalog import CartLine, Product, ProductVariant
from engines.orders.records import (
    build_order_record,
    format_order_number,
    generate_order_number,
)
from engines.promotion.models import BogoOffer, FreeShippingOffer
from engines.promotion.services import calculate_cart

NOW = datetime(2026, 3, 1, 18, 45, tzinfo=timezone.utc)
AREA = DeliveryArea(area_id="a1", city="Cairo", area="Nasr City", delivery_fee=30.0)


def cart():
    variant = ProductVariant(variant_id="v1", label="1 kg", price=150.0)
    lines = [
        CartLine(product=Product("p1", "dates", 200.0, name="Dates"), quantity=2, variant=variant),
        CartLine(product=Product("p2", "nuts", 100.0, name="Almonds"), quantity=1),
    ]
    offers = [
        BogoOffer(offer_id="b", title="BOGO dates", priority=2),
        FreeShippingOffer(offer_id="s", title="Free delivery", min_amount=300.0),
    ]
    return lines, calculate_cart(lines, offers, AREA.delivery_fee, now=NOW)


class TestOrderNumbers:
    def test_format(self):
        number = generate_order_number(NOW, random.Random(7))
        assert number.startswith("MZQ260301")
        assert len(number) == len("MZQ260301") + 4
        assert number[-4:].isdigit()

    def test_deterministic_with_seeded_rng(self):
        assert generate_order_number(NOW, random.Random(1)) == generate_order_number(
            NOW, random.Random(1),
        )

    @pytest.mark.parametrize("raw, shown", [
        (None, "N/A"),
        ("", "N/A"),
        ("MZQ2603011234", "MZQ2603011234"),
        ("3f2b9c1e-aaaa-bbbb", "ORD-3F2B9C1E"),
    ])
    def test_display(self, raw, shown):
        assert format_order_number(raw) == shown


class TestBuildOrderRecord:
    def test_amounts_copied_from_calculation(self):
        lines, calc = cart()
        record = build_order_record(
            calc, lines,
            customer_name="Mona", customer_phone="0100",
            delivery_area=AREA, order_number="MZQ2603010001",
        )
        order = record.order
        assert order["subtotal"] == calc.subtotal == 400.0
        assert order["discount"] == calc.total_discount == 150.0 + 30.0
        assert order["delivery_fee"] == 0.0
        assert order["total"] == calc.total == 250.0
        assert order["status"] == "pending"
        assert order["customer_address"] == "Cairo - Nasr City"
        assert order["customer_city"] == "Cairo"

    def test_item_rows(self):
        lines, calc = cart()
        record = build_order_record(calc, lines, order_number="X")
        assert record.items[0] == {
            "product_id": "p1",
            "product_name": "Dates",
            "size_label": "1 kg",
            "quantity": 2,
            "unit_price": 150.0,
            "total_price": 300.0,
        }
        assert record.items[1]["size_label"] is None

    def test_applied_offer_rows(self):
        lines, calc = cart()
        record = build_order_record(calc, lines, order_number="X")
        assert [a["offer_title"] for a in record.applied_offers] == ["BOGO dates", "Free delivery"]

    def test_guest_defaults(self):
        lines, calc = cart()
        order = build_order_record(calc, lines, order_number="X").to_dict()["order"]
        assert order["customer_name"] == "New customer"
        assert order["user_id"] is None
        assert order["notes"] is None
        assert order["customer_address"] == ""
