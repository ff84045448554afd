"""Storefront promotion policies: validity gate and applicability filter."""

from datetime import datetime, timedelta, timezone

from core.primitives.catalog import CartLine, Product
from core.time.temporal import OfferWindow
from engines.promotion.models import OfferScope, PercentageOffer
from engines.promotion.policies import (
    is_offer_applicable,
    is_offer_applicable_to_line,
    is_offer_valid,
)

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


def pct(**overrides):
    data = dict(offer_id="o1", title="Ten off", discount_percentage=10.0)
    data.update(overrides)
    return PercentageOffer(**data)


class TestValidity:
    def test_active_open_window(self):
        assert is_offer_valid(pct(), NOW)

    def test_inactive(self):
        assert not is_offer_valid(pct(is_active=False), NOW)

    def test_not_started(self):
        offer = pct(window=OfferWindow(start=NOW + timedelta(seconds=1)))
        assert not is_offer_valid(offer, NOW)

    def test_ended(self):
        offer = pct(window=OfferWindow(end=NOW - timedelta(seconds=1)))
        assert not is_offer_valid(offer, NOW)

    def test_bounds_are_inclusive(self):
        assert is_offer_valid(pct(window=OfferWindow(start=NOW)), NOW)
        assert is_offer_valid(pct(window=OfferWindow(end=NOW)), NOW)

    def test_naive_now_against_aware_window(self):
        offer = pct(window=OfferWindow(start=NOW, end=NOW + timedelta(days=1)))
        assert is_offer_valid(offer, NOW.replace(tzinfo=None))
        assert not is_offer_valid(offer, datetime(2026, 3, 9))

    def test_aware_now_against_naive_window(self):
        offer = pct(window=OfferWindow(end=datetime(2026, 3, 10, 12, 0)))
        assert is_offer_valid(offer, NOW)
        assert not is_offer_valid(offer, NOW + timedelta(seconds=1))

    def test_offset_now_is_compared_in_utc(self):
        cairo = timezone(timedelta(hours=2))
        offer = pct(window=OfferWindow(end=NOW))
        assert is_offer_valid(offer, datetime(2026, 3, 10, 14, 0, tzinfo=cairo))
        assert not is_offer_valid(offer, datetime(2026, 3, 10, 14, 1, tzinfo=cairo))


class TestApplicability:
    def test_universal_scope(self):
        assert is_offer_applicable(pct(), "any", "")

    def test_product_list(self):
        offer = pct(scope=OfferScope(products=frozenset({"p1"})))
        assert is_offer_applicable(offer, "p1", "c9")
        assert not is_offer_applicable(offer, "p2", "c9")

    def test_category_list(self):
        offer = pct(scope=OfferScope(categories=frozenset({"nuts"})))
        assert is_offer_applicable(offer, "p2", "nuts")
        assert not is_offer_applicable(offer, "p2", "dates")

    def test_either_list_matches(self):
        offer = pct(scope=OfferScope(
            products=frozenset({"p1"}), categories=frozenset({"nuts"}),
        ))
        assert is_offer_applicable(offer, "p1", "dates")
        assert is_offer_applicable(offer, "p7", "nuts")
        assert not is_offer_applicable(offer, "p7", "dates")

    def test_line_variant(self):
        line = CartLine(product=Product("p1", "nuts", 10.0), quantity=1)
        offer = pct(scope=OfferScope(categories=frozenset({"nuts"})))
        assert is_offer_applicable_to_line(offer, line)
