"""
Storefront Core Time — Offer Windows
======================================
Pure helpers for promotional time windows.
All functions take explicit datetime arguments; none reads a clock.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.time.clock import as_utc


# ══════════════════════════════════════════════════════════════
# OFFER WINDOW: [start, end], either side may be open
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class OfferWindow:
    """
    A time interval whose ends are optional.

    A missing start means "already started", a missing end means
    "never expires". Both bounds are inclusive.

    Invariant: start <= end when both are present.
    """

    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.start is not None:
            object.__setattr__(self, "start", as_utc(self.start))
        if self.end is not None:
            object.__setattr__(self, "end", as_utc(self.end))
        if (
            self.start is not None
            and self.end is not None
            and self.start > self.end
        ):
            raise ValueError(
                f"OfferWindow start ({self.start}) must be <= end ({self.end})."
            )

    @property
    def is_open_ended(self) -> bool:
        return self.start is None and self.end is None

    def has_started(self, now: datetime) -> bool:
        return self.start is None or as_utc(now) >= self.start

    def has_ended(self, now: datetime) -> bool:
        return self.end is not None and as_utc(now) > self.end

    def contains(self, now: datetime) -> bool:
        """Check if `now` falls within the window (inclusive)."""
        return self.has_started(now) and not self.has_ended(now)


# ══════════════════════════════════════════════════════════════
# TIMESTAMP PARSING
# ══════════════════════════════════════════════════════════════

def parse_timestamp(value) -> Optional[datetime]:
    """
    Parse a database timestamp into an aware UTC datetime.

    Accepts datetime instances, ISO-8601 strings (a trailing 'Z' is
    allowed) and None / empty string. Naive values are taken as UTC.

    Raises:
        ValueError: If a non-empty string cannot be parsed.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        raw = str(value).strip()
        if not raw:
            return None
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError as exc:
            raise ValueError(f"Invalid timestamp: '{value}'.") from exc
    return as_utc(parsed)
