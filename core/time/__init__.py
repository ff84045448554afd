"""
Storefront Core Time — Public API
===================================
Explicit clock protocol and offer-window helpers.
Doctrine: NO datetime.now() in pricing logic.
"""

from core.time.clock import (
    Clock,
    FixedClock,
    SystemClock,
    get_default_clock,
    as_utc,
    now_utc,
    override_clock,
    resolve_now,
    set_default_clock,
)
from core.time.temporal import (
    OfferWindow,
    parse_timestamp,
)

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "get_default_clock",
    "set_default_clock",
    "now_utc",
    "override_clock",
    "as_utc",
    "resolve_now",
    "OfferWindow",
    "parse_timestamp",
]
