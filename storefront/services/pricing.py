"""Pricing rules: sale discounts and the free-shipping threshold"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from ..models.product import DiscountType, Product

FREE_SHIPPING_THRESHOLD = 200
FLAT_SHIPPING_FEE = 100


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_aware(value: datetime) -> datetime:
    # Naive timestamps are treated as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def is_sale_active(product: Product, now: Optional[datetime] = None) -> bool:
    """True if the product is flagged on sale and the sale has not ended"""
    if not product.is_on_sale:
        return False
    if product.sale_end_time is None:
        return True
    now = _as_aware(now or _utcnow())
    return _as_aware(product.sale_end_time) > now


def final_price(
    unit_price: float,
    product: Product,
    now: Optional[datetime] = None,
) -> float:
    """
    Apply the product's sale discount to ``unit_price``.

    Percentage discounts round to the nearest whole currency unit; amount
    discounts are subtracted as-is. The result never goes below zero.
    """
    if not is_sale_active(product, now):
        return unit_price

    if product.discount_type == DiscountType.PERCENTAGE:
        discounted = unit_price - unit_price * product.discount_amount / 100
        return max(0, _round_half_up(discounted))
    if product.discount_type == DiscountType.AMOUNT:
        return max(0, unit_price - product.discount_amount)
    raise ValueError(f"Unknown discount type: {product.discount_type}")


def sale_time_remaining(
    product: Product,
    now: Optional[datetime] = None,
) -> Optional[timedelta]:
    """Time left before the sale ends, or None for open-ended/inactive sales"""
    if not is_sale_active(product, now) or product.sale_end_time is None:
        return None
    now = _as_aware(now or _utcnow())
    return _as_aware(product.sale_end_time) - now


def shipping_cost(
    subtotal: float,
    threshold: float = FREE_SHIPPING_THRESHOLD,
    fee: float = FLAT_SHIPPING_FEE,
) -> float:
    """Flat fee below the threshold, free at or above it"""
    return fee if subtotal < threshold else 0


def amount_to_free_shipping(
    subtotal: float,
    threshold: float = FREE_SHIPPING_THRESHOLD,
) -> float:
    return max(0, threshold - subtotal)
