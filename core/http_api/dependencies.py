"""
Storefront HTTP API - Dependencies
===================================
Injected collaborators for handler wiring: the pricing service, the
admin config store, the offer catalog source and order numbering.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Mapping, Protocol

from core.config.rules import ConfigStore
from core.time.clock import Clock
from engines.orders.records import generate_order_number


class OfferSource(Protocol):
    """
    Data-access boundary for the offers table.

    Expected to return active rows ordered by priority descending.
    """

    def list_offer_rows(self) -> Iterable[Mapping[str, Any]]:
        ...


class OrderNumberProvider(Protocol):
    def new_order_number(self, now: datetime) -> str:
        ...


class InMemoryOfferSource:
    """List-backed offer source standing in for the hosted database."""

    def __init__(self, rows: Iterable[Mapping[str, Any]] = ()):
        self._rows = [dict(r) for r in rows]

    def add_row(self, row: Mapping[str, Any]) -> None:
        self._rows.append(dict(row))

    def list_offer_rows(self) -> list[dict[str, Any]]:
        active = [r for r in self._rows if r.get("is_active", True)]
        return sorted(active, key=lambda r: -int(r.get("priority") or 0))


class RandomOrderNumberProvider:
    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    def new_order_number(self, now: datetime) -> str:
        return generate_order_number(now, self._rng)


@dataclass(frozen=True)
class HttpApiDependencies:
    pricing_service: Any
    config_store: ConfigStore
    offer_source: OfferSource
    clock: Clock
    order_numbers: OrderNumberProvider
