"""
Storefront HTTP API - Public API
=================================
"""

from core.http_api.contracts import (
    BestOfferHttpRequest,
    CartPriceHttpRequest,
    HttpApiErrorBody,
    HttpApiResponse,
    OrderSummaryHttpRequest,
)
from core.http_api.dependencies import (
    HttpApiDependencies,
    InMemoryOfferSource,
    OfferSource,
    OrderNumberProvider,
    RandomOrderNumberProvider,
)
from core.http_api.errors import (
    error_response,
    status_for,
    success_response,
)
from core.http_api.handlers import (
    list_delivery_areas,
    post_best_offer,
    post_cart_price,
    post_order_summary,
)

__all__ = [
    "CartPriceHttpRequest",
    "BestOfferHttpRequest",
    "OrderSummaryHttpRequest",
    "HttpApiErrorBody",
    "HttpApiResponse",
    "OfferSource",
    "OrderNumberProvider",
    "InMemoryOfferSource",
    "RandomOrderNumberProvider",
    "HttpApiDependencies",
    "error_response",
    "success_response",
    "status_for",
    "list_delivery_areas",
    "post_best_offer",
    "post_cart_price",
    "post_order_summary",
]
