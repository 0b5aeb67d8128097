"""Checkout models for the storefront"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .product import SelectedVariant


class DeliveryType(str, Enum):
    SHIPPING = "shipping"
    SELF_PICKUP = "self-pickup"


class PaymentMethod(str, Enum):
    ONLINE = "online"
    COD = "cod"


class PaymentStatus(str, Enum):
    PAID = "paid"
    PENDING = "pending"


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    WAITING = "waiting"
    SHIPPING = "shipping"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentOutcome(str, Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    TIMED_OUT = "timed_out"


class CustomerDetails(BaseModel):
    """Customer-entered checkout form fields"""
    name: str = ""
    phone: str = ""
    address: Optional[str] = None


class CheckoutRequest(BaseModel):
    """Request to checkout"""
    cart_id: str
    customer: CustomerDetails
    delivery_type: DeliveryType = DeliveryType.SELF_PICKUP
    payment_method: PaymentMethod = PaymentMethod.ONLINE


class OrderItem(BaseModel):
    """Line item captured in an order snapshot"""
    id: str
    name: str
    price: float
    quantity: int
    selected_variant: Optional[SelectedVariant] = None

    class Config:
        frozen = True

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class Order(BaseModel):
    """Immutable order snapshot taken at checkout time"""
    order_id: str
    customer_name: str
    customer_phone: str
    customer_address: Optional[str] = None
    delivery_type: DeliveryType
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    order_status: OrderStatus = OrderStatus.PENDING
    items: tuple[OrderItem, ...]
    subtotal: float
    shipping_cost: float
    total: float
    created_at: datetime

    class Config:
        frozen = True


class CheckoutResponse(BaseModel):
    """Response from checkout"""
    success: bool
    order: Optional[Order] = None
    display_order_id: Optional[str] = None
    message: Optional[str] = None


class PaymentRequest(BaseModel):
    """What the shopper needs to pay online: amount, reference and the UPI link for the QR code"""
    reference: str
    amount: float
    currency: str
    payee: str
    upi_uri: str
    timeout_seconds: float


class UpdateOrderStatusRequest(BaseModel):
    """Request to move an order through its lifecycle"""
    status: OrderStatus


class SalesSummary(BaseModel):
    """Aggregates over stored orders for the seller dashboard"""
    total_revenue: float = 0.0
    total_orders: int = 0
    completed_orders: int = 0
    pending_orders: int = 0
    avg_order_value: int = 0
    paid_revenue: float = 0.0
    revenue_by_payment_method: dict[str, float] = Field(default_factory=dict)
