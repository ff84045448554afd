"""
Storefront Core Config — Admin-Configurable Rules
===================================================
Doctrine: No hardcoded fees or currency labels in pricing logic.
Delivery fees and display settings come from admin-configured
data (delivery_areas / store_settings tables), not from source code.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Protocol


# ══════════════════════════════════════════════════════════════
# STORE SETTINGS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class StoreSettings:
    """
    Display and pricing settings for the storefront.

    currency is a display label appended to amounts ("EGP"), not an
    ISO conversion target; all amounts share one currency.
    """

    store_name: str = "Mazaq"
    currency: str = "EGP"
    money_places: int = 2
    default_delivery_fee: float = 0.0

    def __post_init__(self) -> None:
        if not self.currency or not isinstance(self.currency, str):
            raise ValueError("currency must be a non-empty string.")
        if not isinstance(self.money_places, int) or self.money_places < 0:
            raise ValueError("money_places must be a non-negative int.")
        if (
            not math.isfinite(self.default_delivery_fee)
            or self.default_delivery_fee < 0
        ):
            raise ValueError("default_delivery_fee must be >= 0.")

    def format_money(self, amount: float) -> str:
        """Two-decimal presentation rounding, e.g. '30.00 EGP'."""
        return f"{amount:.{self.money_places}f} {self.currency}"


# ══════════════════════════════════════════════════════════════
# DELIVERY AREA
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class DeliveryArea:
    """A delivery zone and its base delivery fee."""

    area_id: str
    city: str
    area: str
    delivery_fee: float
    delivery_time: str = ""
    is_active: bool = True

    def __post_init__(self) -> None:
        if not self.area_id:
            raise ValueError("area_id must be non-empty.")
        if not math.isfinite(self.delivery_fee) or self.delivery_fee < 0:
            raise ValueError(
                f"delivery_fee must be a finite amount >= 0, got {self.delivery_fee}."
            )

    @property
    def label(self) -> str:
        return f"{self.city} - {self.area}"

    def to_dict(self) -> dict:
        return {
            "area_id": self.area_id,
            "city": self.city,
            "area": self.area,
            "delivery_fee": self.delivery_fee,
            "delivery_time": self.delivery_time,
            "is_active": self.is_active,
        }


# ══════════════════════════════════════════════════════════════
# CONFIG STORE PROTOCOL
# ══════════════════════════════════════════════════════════════

class ConfigStore(Protocol):
    """
    Protocol for admin-configured storefront settings.

    Implementations may back this with the hosted database or memory.
    """

    def get_store_settings(self) -> StoreSettings:
        ...  # pragma: no cover

    def list_delivery_areas(self) -> list[DeliveryArea]:
        """Active delivery areas only."""
        ...  # pragma: no cover

    def get_delivery_area(self, area_id: str) -> Optional[DeliveryArea]:
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# IN-MEMORY CONFIG STORE (for testing / local runs)
# ══════════════════════════════════════════════════════════════

class InMemoryConfigStore:
    """Simple in-memory config store for testing and local runs."""

    def __init__(self, settings: Optional[StoreSettings] = None) -> None:
        self._settings = settings or StoreSettings()
        self._areas: list[DeliveryArea] = []

    def set_store_settings(self, settings: StoreSettings) -> None:
        self._settings = settings

    def add_delivery_area(self, area: DeliveryArea) -> None:
        self._areas.append(area)

    def get_store_settings(self) -> StoreSettings:
        return self._settings

    def list_delivery_areas(self) -> list[DeliveryArea]:
        return [a for a in self._areas if a.is_active]

    def get_delivery_area(self, area_id: str) -> Optional[DeliveryArea]:
        for a in self._areas:
            if a.area_id == area_id and a.is_active:
                return a
        return None
