"""
Storefront Django Adapter Wiring
=================================
Constructs HttpApiDependencies for local/staging runs.

Adapter-only glue:
- store settings come from Django settings (STOREFRONT_*)
- the offer catalog and delivery areas are in-memory stand-ins for
  the hosted database tables
"""

from __future__ import annotations

import threading

from django.conf import settings as django_settings

from core.config.rules import DeliveryArea, InMemoryConfigStore, StoreSettings
from core.http_api.dependencies import (
    HttpApiDependencies,
    InMemoryOfferSource,
    RandomOrderNumberProvider,
)
from core.time.clock import SystemClock
from engines.promotion.services import PricingService


DEV_DELIVERY_AREAS = (
    DeliveryArea(area_id="cairo-nasr-city", city="Cairo", area="Nasr City",
                 delivery_fee=30.0, delivery_time="1-2 days"),
    DeliveryArea(area_id="giza-dokki", city="Giza", area="Dokki",
                 delivery_fee=40.0, delivery_time="2-3 days"),
)

DEV_OFFER_ROWS = (
    {
        "id": "dev-free-shipping",
        "title": "Free delivery over 500",
        "type": "free_shipping",
        "min_amount": 500,
        "priority": 1,
        "is_active": True,
        "auto_apply": True,
    },
)

_DEPENDENCIES_LOCK = threading.Lock()
_DEPENDENCIES: HttpApiDependencies | None = None


def _build_store_settings() -> StoreSettings:
    return StoreSettings(
        store_name=getattr(django_settings, "STOREFRONT_NAME", "Mazaq"),
        currency=getattr(django_settings, "STOREFRONT_CURRENCY", "EGP"),
        default_delivery_fee=float(
            getattr(django_settings, "STOREFRONT_DEFAULT_DELIVERY_FEE", 0.0)
        ),
    )


def _create_dependencies() -> HttpApiDependencies:
    store_settings = _build_store_settings()
    config_store = InMemoryConfigStore(store_settings)
    for area in DEV_DELIVERY_AREAS:
        config_store.add_delivery_area(area)

    clock = SystemClock()
    return HttpApiDependencies(
        pricing_service=PricingService(clock=clock, settings=store_settings),
        config_store=config_store,
        offer_source=InMemoryOfferSource(DEV_OFFER_ROWS),
        clock=clock,
        order_numbers=RandomOrderNumberProvider(),
    )


def build_dependencies() -> HttpApiDependencies:
    """
    Lazy singleton wiring for adapter runtime.
    """
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        if _DEPENDENCIES is None:
            _DEPENDENCIES = _create_dependencies()
        return _DEPENDENCIES


def set_dependencies(dependencies: HttpApiDependencies | None) -> None:
    """Replace (or with None, reset) the wired dependencies. Tests only."""
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        _DEPENDENCIES = dependencies
