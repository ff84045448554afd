"""
Tests for core.config — Admin-configurable store settings.
"""

import math

import pytest

from core.config.rules import DeliveryArea, InMemoryConfigStore, StoreSettings


# ── StoreSettings Tests ──────────────────────────────────────

class TestStoreSettings:
    def test_defaults(self):
        settings = StoreSettings()
        assert settings.currency == "EGP"
        assert settings.default_delivery_fee == 0.0

    def test_format_money(self):
        assert StoreSettings().format_money(30) == "30.00 EGP"
        assert StoreSettings(currency="USD").format_money(12.5) == "12.50 USD"

    def test_rejects_empty_currency(self):
        with pytest.raises(ValueError, match="currency"):
            StoreSettings(currency="")

    def test_rejects_negative_default_fee(self):
        with pytest.raises(ValueError, match="default_delivery_fee"):
            StoreSettings(default_delivery_fee=-1.0)

    def test_rejects_nan_default_fee(self):
        with pytest.raises(ValueError):
            StoreSettings(default_delivery_fee=math.nan)

    def test_frozen_immutability(self):
        settings = StoreSettings()
        with pytest.raises(AttributeError):
            settings.currency = "USD"


# ── DeliveryArea Tests ───────────────────────────────────────

class TestDeliveryArea:
    def test_label(self):
        area = DeliveryArea(area_id="a1", city="Cairo", area="Maadi", delivery_fee=30.0)
        assert area.label == "Cairo - Maadi"

    def test_rejects_negative_fee(self):
        with pytest.raises(ValueError, match="delivery_fee"):
            DeliveryArea(area_id="a1", city="Cairo", area="Maadi", delivery_fee=-5.0)

    def test_rejects_empty_id(self):
        with pytest.raises(ValueError, match="area_id"):
            DeliveryArea(area_id="", city="Cairo", area="Maadi", delivery_fee=5.0)


# ── InMemoryConfigStore Tests ────────────────────────────────

class TestInMemoryConfigStore:
    def test_active_areas_only(self):
        store = InMemoryConfigStore()
        store.add_delivery_area(
            DeliveryArea(area_id="a1", city="Cairo", area="Maadi", delivery_fee=30.0)
        )
        store.add_delivery_area(
            DeliveryArea(area_id="a2", city="Giza", area="Haram",
                         delivery_fee=45.0, is_active=False)
        )
        assert [a.area_id for a in store.list_delivery_areas()] == ["a1"]
        assert store.get_delivery_area("a1").delivery_fee == 30.0
        assert store.get_delivery_area("a2") is None
        assert store.get_delivery_area("missing") is None

    def test_settings_replacement(self):
        store = InMemoryConfigStore()
        store.set_store_settings(StoreSettings(currency="USD"))
        assert store.get_store_settings().currency == "USD"
