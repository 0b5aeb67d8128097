# Storefront Models

from .product import (
    DEFAULT_VARIANT_LABEL,
    DiscountType,
    Product,
    ProductVariant,
    SelectedVariant,
    ProductView,
    ProductSearchResponse,
)
from .cart import (
    Cart,
    CartItem,
    CartLine,
    CartTotals,
    AddToCartRequest,
    UpdateCartItemRequest,
    CartResponse,
)
from .checkout import (
    CheckoutRequest,
    CheckoutResponse,
    CustomerDetails,
    DeliveryType,
    Order,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    PaymentOutcome,
    PaymentStatus,
    SalesSummary,
    UpdateOrderStatusRequest,
)

__all__ = [
    "DEFAULT_VARIANT_LABEL",
    "DiscountType",
    "Product",
    "ProductVariant",
    "SelectedVariant",
    "ProductView",
    "ProductSearchResponse",
    "Cart",
    "CartItem",
    "CartLine",
    "CartTotals",
    "AddToCartRequest",
    "UpdateCartItemRequest",
    "CartResponse",
    "CheckoutRequest",
    "CheckoutResponse",
    "CustomerDetails",
    "DeliveryType",
    "Order",
    "OrderItem",
    "OrderStatus",
    "PaymentMethod",
    "PaymentOutcome",
    "PaymentStatus",
    "SalesSummary",
    "UpdateOrderStatusRequest",
]
