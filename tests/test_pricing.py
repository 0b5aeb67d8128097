"""
test_pricing.py — Sale discounts and shipping rules.
Run: pytest tests/test_pricing.py -v
"""
from datetime import datetime, timedelta, timezone

import pytest

from storefront.models.product import DiscountType, Product
from storefront.services import pricing

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def on_sale(discount_type, amount, base_price=100, sale_end_time=None, is_on_sale=True):
    return Product(
        id="p",
        name="Sale Item",
        base_price=base_price,
        category="Snacks",
        is_on_sale=is_on_sale,
        discount_amount=amount,
        discount_type=discount_type,
        sale_end_time=sale_end_time,
    )


def test_percentage_discount():
    product = on_sale(DiscountType.PERCENTAGE, 10)
    assert pricing.final_price(100, product, NOW) == 90


def test_percentage_discount_rounds_half_up():
    product = on_sale(DiscountType.PERCENTAGE, 15, base_price=75)
    # 75 - 11.25 = 63.75
    assert pricing.final_price(75, product, NOW) == 64

    half = on_sale(DiscountType.PERCENTAGE, 50, base_price=45)
    # 22.5 rounds up, not to even
    assert pricing.final_price(45, half, NOW) == 23


def test_amount_discount():
    product = on_sale(DiscountType.AMOUNT, 20)
    assert pricing.final_price(100, product, NOW) == 80


def test_amount_discount_floors_at_zero():
    product = on_sale(DiscountType.AMOUNT, 150)
    assert pricing.final_price(100, product, NOW) == 0


def test_percentage_over_hundred_floors_at_zero():
    product = on_sale(DiscountType.PERCENTAGE, 120)
    assert pricing.final_price(100, product, NOW) == 0


def test_no_sale_returns_unit_price():
    product = on_sale(DiscountType.AMOUNT, 20, is_on_sale=False)
    assert pricing.final_price(100, product, NOW) == 100


def test_discount_applies_to_given_unit_price():
    product = on_sale(DiscountType.PERCENTAGE, 10)
    # e.g. a variant price rather than the base price
    assert pricing.final_price(250, product, NOW) == 225


def test_sale_expired():
    product = on_sale(DiscountType.AMOUNT, 20, sale_end_time=NOW - timedelta(minutes=1))

    assert pricing.is_sale_active(product, NOW) is False
    assert pricing.final_price(100, product, NOW) == 100


def test_sale_ending_later_is_active():
    product = on_sale(DiscountType.AMOUNT, 20, sale_end_time=NOW + timedelta(hours=2))

    assert pricing.is_sale_active(product, NOW) is True
    assert pricing.sale_time_remaining(product, NOW) == timedelta(hours=2)


def test_sale_without_end_has_no_countdown():
    product = on_sale(DiscountType.AMOUNT, 20)

    assert pricing.is_sale_active(product, NOW) is True
    assert pricing.sale_time_remaining(product, NOW) is None


def test_naive_sale_end_treated_as_utc():
    product = on_sale(DiscountType.AMOUNT, 20, sale_end_time=datetime(2026, 3, 1, 11, 0))
    assert pricing.is_sale_active(product, NOW) is False


@pytest.mark.parametrize("subtotal,expected", [
    (0, 100),
    (199, 100),
    (200, 0),
    (1000, 0),
])
def test_shipping_cost(subtotal, expected):
    assert pricing.shipping_cost(subtotal) == expected


def test_amount_to_free_shipping():
    assert pricing.amount_to_free_shipping(150) == 50
    assert pricing.amount_to_free_shipping(250) == 0
