"""Storefront offer badges shown on product cards."""

from engines.promotion.badges import offer_badge
from engines.promotion.models import (
    BogoOffer,
    BuyXGetYOffer,
    FixedAmountOffer,
    FreeShippingOffer,
    OfferType,
    PercentageOffer,
)


class TestOfferBadge:
    def test_percentage(self):
        badge = offer_badge(PercentageOffer(offer_id="o", title="t", discount_percentage=12.5))
        assert (badge.kind, badge.text) == ("percent", "12.5% off")

    def test_category_discount(self):
        offer = PercentageOffer(
            offer_id="o", title="t", discount_percentage=20.0,
            offer_type=OfferType.CATEGORY_DISCOUNT,
        )
        assert offer_badge(offer).text == "20% off"

    def test_fixed(self):
        badge = offer_badge(
            FixedAmountOffer(offer_id="o", title="t", discount_amount=50.0), currency="USD",
        )
        assert badge.to_dict() == {"kind": "amount", "text": "50 USD off"}

    def test_give_aways(self):
        bxgy = BuyXGetYOffer(offer_id="o", title="t", min_quantity=3, free_quantity=1)
        assert offer_badge(bxgy).text == "Buy 3 get 1 free"
        assert offer_badge(BogoOffer(offer_id="o", title="t")).text == "Buy 1 get the 2nd free"

    def test_free_shipping(self):
        badge = offer_badge(FreeShippingOffer(offer_id="o", title="t", min_amount=500.0))
        assert (badge.kind, badge.text) == ("delivery", "Free delivery over 500 EGP")
