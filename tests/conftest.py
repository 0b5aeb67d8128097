import pytest

from storefront.core.config import Settings
from storefront.database.carts import CartStore
from storefront.models.product import DiscountType, Product, ProductVariant


@pytest.fixture
def settings():
    return Settings(payment_timeout_seconds=0.05, store_name="Test Store")


@pytest.fixture
def cart():
    return CartStore(cart_id="cart-1")


@pytest.fixture
def plain_product():
    """Product without variants, priced at its base price"""
    return Product(id="A", name="Murukku", base_price=60, category="Snacks")


@pytest.fixture
def turmeric():
    return Product(
        id="T",
        name="Turmeric Powder",
        base_price=120,
        category="Spices",
        variants=[
            ProductVariant(weight="100g", price=60, is_default=True),
            ProductVariant(weight="250g", price=120),
        ],
    )


@pytest.fixture
def sale_product():
    return Product(
        id="S",
        name="Coffee Powder",
        base_price=100,
        category="Beverages",
        is_on_sale=True,
        discount_amount=10,
        discount_type=DiscountType.PERCENTAGE,
    )
