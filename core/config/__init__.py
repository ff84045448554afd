"""
Storefront Core Config — Public API
=====================================
Admin-configurable store settings and delivery areas.
Doctrine: No hardcoded fees or currency labels in pricing logic.
"""

from core.config.rules import (
    ConfigStore,
    DeliveryArea,
    InMemoryConfigStore,
    StoreSettings,
)

__all__ = [
    "StoreSettings",
    "DeliveryArea",
    "ConfigStore",
    "InMemoryConfigStore",
]
