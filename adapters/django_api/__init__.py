"""
Storefront Django HTTP adapter.
Thin framework glue over core/http_api handlers.
"""

from adapters.django_api.wiring import (
    DEV_DELIVERY_AREAS,
    DEV_OFFER_ROWS,
    build_dependencies,
    set_dependencies,
)

__all__ = [
    "DEV_DELIVERY_AREAS",
    "DEV_OFFER_ROWS",
    "build_dependencies",
    "set_dependencies",
]
