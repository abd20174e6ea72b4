import pytest

from storefront.order.pricing import FLAT_SHIPPING_FEE, price_order
from storefront.shared.money import effective_price


class TestEffectivePrice:
    def test_no_discount(self):
        assert effective_price(50.0, 0) == 50.0

    def test_percentage_discount(self):
        assert effective_price(50.0, 20) == 40.0

    def test_rounded_to_cents(self):
        assert effective_price(19.99, 15) == 16.99

    def test_full_discount(self):
        assert effective_price(30.0, 100) == 0.0


class TestPriceOrder:
    def test_discounted_cart_above_threshold(self):
        pricing = price_order([(effective_price(50.0, 20), 3)])
        assert pricing == {
            "items_price": 120.0,
            "tax_price": 18.0,
            "shipping_price": 0.0,
            "total_price": 138.0,
        }

    def test_cart_below_threshold_pays_shipping(self):
        pricing = price_order([(40.0, 2)])
        assert pricing["items_price"] == 80.0
        assert pricing["tax_price"] == 12.0
        assert pricing["shipping_price"] == FLAT_SHIPPING_FEE
        assert pricing["total_price"] == 102.0

    def test_exactly_at_threshold_still_pays_shipping(self):
        assert price_order([(100.0, 1)])["shipping_price"] == 10.0

    def test_just_above_threshold_ships_free(self):
        assert price_order([(100.01, 1)])["shipping_price"] == 0.0

    @pytest.mark.parametrize(
        "lines",
        [
            [(9.99, 1)],
            [(12.5, 4), (3.33, 3)],
            [(99.99, 1), (0.02, 1)],
            [(1234.56, 2)],
        ],
    )
    def test_total_is_sum_of_parts(self, lines):
        pricing = price_order(lines)
        assert pricing["tax_price"] == round(pricing["items_price"] * 0.15, 2)
        assert pricing["total_price"] == pytest.approx(
            pricing["items_price"] + pricing["tax_price"] + pricing["shipping_price"]
        )
        expected_shipping = 0.0 if pricing["items_price"] > 100 else 10.0
        assert pricing["shipping_price"] == expected_shipping
