"""
Storefront Core Time — Clocks and UTC Normalisation
=====================================================
Doctrine: NO datetime.now() inside pricing logic.

Engine functions take `now` explicitly; when a caller omits it, the
value comes from the injectable default clock below. Every instant
that reaches an offer-window comparison passes through as_utc, so
naive and aware datetimes never meet in a comparison.
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import Iterator, Optional, Protocol


# ══════════════════════════════════════════════════════════════
# UTC NORMALISATION
# ══════════════════════════════════════════════════════════════

def as_utc(value: datetime) -> datetime:
    """
    Aware UTC view of `value`.

    Naive datetimes are taken to already be UTC (the database stores
    UTC timestamps); aware ones are converted.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# ══════════════════════════════════════════════════════════════
# CLOCKS
# ══════════════════════════════════════════════════════════════

class Clock(Protocol):
    """Anything that can say what time it is, in UTC."""

    def now_utc(self) -> datetime:
        ...  # pragma: no cover


class SystemClock:
    """Wall-clock time, used by the deployed adapter."""

    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """
    Pinned time for tests and replays.

    A naive start value is read as UTC, like every other instant the
    engine sees.
    """

    def __init__(self, fixed_dt: datetime) -> None:
        self._current = as_utc(fixed_dt)

    def now_utc(self) -> datetime:
        return self._current

    def advance(self, seconds: float) -> None:
        """Move forward, e.g. across an offer's start or end date."""
        self._current += timedelta(seconds=seconds)


# ══════════════════════════════════════════════════════════════
# DEFAULT CLOCK
# ══════════════════════════════════════════════════════════════

_default_clock: Clock = SystemClock()


def set_default_clock(clock: Clock) -> None:
    global _default_clock
    _default_clock = clock


def get_default_clock() -> Clock:
    return _default_clock


@contextmanager
def override_clock(clock: Clock) -> Iterator[Clock]:
    """Swap the default clock for the duration of a block."""
    previous = get_default_clock()
    set_default_clock(clock)
    try:
        yield clock
    finally:
        set_default_clock(previous)


def now_utc() -> datetime:
    return _default_clock.now_utc()


def resolve_now(now: Optional[datetime] = None) -> datetime:
    """The caller's `now` in UTC, or the default clock's time if omitted."""
    if now is None:
        return as_utc(_default_clock.now_utc())
    return as_utc(now)
