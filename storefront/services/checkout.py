"""
Checkout Orchestrator

Turns a cart plus the customer's checkout form into an immutable order
snapshot, stores it, and clears the cart. The cart is cleared only after
the order store accepts the order; any earlier failure leaves it intact.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.config import Settings, get_settings
from ..database.carts import CartStore
from ..database.orders import OrderDatabase
from ..models.cart import CartTotals
from ..models.checkout import (
    CheckoutRequest,
    CustomerDetails,
    DeliveryType,
    Order,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    PaymentOutcome,
    PaymentStatus,
)
from .order_ids import order_id_for_display
from .payments import PaymentGateway

logger = logging.getLogger(__name__)

_PHONE = re.compile(r"^\d{10}$")


class CheckoutError(Exception):
    """Checkout could not be completed"""

    retryable = False


class CheckoutValidationError(CheckoutError):
    """Customer-entered fields failed validation"""

    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


class PaymentError(CheckoutError):
    """Online payment was not completed"""

    retryable = True

    def __init__(self, outcome: PaymentOutcome):
        if outcome == PaymentOutcome.TIMED_OUT:
            message = "Payment time expired. Please try again."
        else:
            message = "Payment was cancelled."
        super().__init__(message)
        self.outcome = outcome


class OrderPlacementError(CheckoutError):
    """The order store rejected or failed to save the order"""

    retryable = True


@dataclass
class CheckoutResult:
    order: Order
    message: str
    display_order_id: str = field(init=False)

    def __post_init__(self):
        self.display_order_id = order_id_for_display(self.order.order_id)


def validate_customer(customer: CustomerDetails, delivery_type: DeliveryType) -> list[str]:
    """Return user-facing messages for every invalid field"""
    errors = []
    if not customer.name.strip():
        errors.append("Please enter your name")
    if not _PHONE.match(customer.phone.strip()):
        errors.append("Please enter a valid 10-digit phone number")
    if delivery_type == DeliveryType.SHIPPING and not (customer.address or "").strip():
        errors.append("Please enter your delivery address for shipping")
    return errors


def compute_totals(cart: CartStore, delivery_type: DeliveryType) -> CartTotals:
    """Totals at submission time; self-pickup never pays shipping"""
    return cart.get_totals(delivery_type)


def snapshot_items(cart: CartStore) -> tuple[OrderItem, ...]:
    """Freeze the cart's current lines into order items"""
    return tuple(
        OrderItem(
            id=item.product_id,
            name=item.product_name,
            price=item.effective_price,
            quantity=item.quantity,
            selected_variant=item.selected_variant,
        )
        for item in cart.items
    )


def build_order(
    order_id: str,
    items: tuple[OrderItem, ...],
    request: CheckoutRequest,
    totals: CartTotals,
    payment_status: PaymentStatus,
    created_at: Optional[datetime] = None,
) -> Order:
    """Combine the frozen line items, totals and customer data into an order record"""
    customer = request.customer
    address = None
    if request.delivery_type == DeliveryType.SHIPPING:
        address = (customer.address or "").strip()

    return Order(
        order_id=order_id,
        customer_name=customer.name.strip(),
        customer_phone=customer.phone.strip(),
        customer_address=address,
        delivery_type=request.delivery_type,
        payment_method=request.payment_method,
        payment_status=payment_status,
        order_status=OrderStatus.PENDING,
        items=items,
        subtotal=totals.subtotal,
        shipping_cost=totals.shipping_cost,
        total=totals.total,
        created_at=created_at or datetime.now(),
    )


def _money(symbol: str, amount: float) -> str:
    if float(amount).is_integer():
        return f"{symbol}{int(amount)}"
    return f"{symbol}{amount:.2f}"


def format_order_message(
    order: Order,
    store_name: str,
    currency_symbol: str = "₹",
    free_shipping_threshold: float = 200,
) -> str:
    """Plain-text order summary handed to the messaging channel"""
    lines = []
    for item in order.items:
        variant = f" ({item.selected_variant.weight})" if item.selected_variant else ""
        lines.append(
            f"• {item.name}{variant}: {_money(currency_symbol, item.price)} × {item.quantity}"
            f" = {_money(currency_symbol, item.line_total)}"
        )

    if order.delivery_type == DeliveryType.SHIPPING:
        delivery_line = f"Address: {order.customer_address}"
        free = " (FREE!)" if order.subtotal >= free_shipping_threshold else ""
        shipping_line = f"Shipping: {_money(currency_symbol, order.shipping_cost)}{free}\n"
    elif order.delivery_type == DeliveryType.SELF_PICKUP:
        delivery_line = "Delivery: Self Pickup"
        shipping_line = ""
    else:
        raise ValueError(f"Unknown delivery type: {order.delivery_type}")

    if order.payment_status == PaymentStatus.PAID:
        payment_line = "✅ Payment Status: PAID"
    elif order.payment_status == PaymentStatus.PENDING:
        payment_line = "⏳ Payment Status: PENDING (Cash on Delivery)"
    else:
        raise ValueError(f"Unknown payment status: {order.payment_status}")

    return (
        f"🛒 *New Order {order_id_for_display(order.order_id)} from {store_name}*\n"
        f"\n"
        f"👤 *Customer Details:*\n"
        f"Name: {order.customer_name}\n"
        f"Phone: {order.customer_phone}\n"
        f"{delivery_line}\n"
        f"\n"
        f"📦 *Order Details:*\n"
        + "\n".join(lines)
        + "\n\n"
        f"💰 *Bill Summary:*\n"
        f"Subtotal: {_money(currency_symbol, order.subtotal)}\n"
        f"{shipping_line}"
        f"*Grand Total: {_money(currency_symbol, order.total)}*\n"
        f"\n"
        f"{payment_line}"
    )


class CheckoutOrchestrator:
    """
    Runs a single checkout attempt.

    Repeated submissions are not de-duplicated; each call is an
    independent attempt.
    """

    def __init__(
        self,
        order_store: OrderDatabase,
        payment_gateway: PaymentGateway,
        settings: Optional[Settings] = None,
    ):
        self.order_store = order_store
        self.payment_gateway = payment_gateway
        self.settings = settings or get_settings()

    async def submit(self, cart: CartStore, request: CheckoutRequest) -> CheckoutResult:
        """
        Validate, collect payment, store the order, then clear the cart.

        Raises:
            CheckoutValidationError: customer fields are invalid
            CheckoutError: the cart is empty
            PaymentError: online payment was cancelled or timed out
            OrderPlacementError: the order store failed
        """
        if cart.is_empty:
            raise CheckoutError("Your cart is empty")

        errors = validate_customer(request.customer, request.delivery_type)
        if errors:
            raise CheckoutValidationError(errors)

        # Lines and totals are captured together; the cart may change while payment is pending
        items = snapshot_items(cart)
        totals = compute_totals(cart, request.delivery_type)
        payment_status = await self._collect_payment(cart, request, totals)

        try:
            order = build_order(
                self.order_store.next_order_id(),
                items,
                request,
                totals,
                payment_status,
            )
            self.order_store.save_order(order)
        except Exception as e:
            logger.exception(f"Failed to save order for cart {cart.cart_id}")
            raise OrderPlacementError(
                "We couldn't place your order. Your cart has been kept, please try again."
            ) from e

        cart.clear_cart()
        logger.info(
            f"Order {order.order_id} created: {order.total} "
            f"({order.payment_method.value}, {order.payment_status.value}, "
            f"{order.delivery_type.value})"
        )

        message = format_order_message(
            order,
            self.settings.store_name,
            self.settings.currency_symbol,
            self.settings.free_shipping_threshold,
        )
        return CheckoutResult(order=order, message=message)

    async def _collect_payment(
        self,
        cart: CartStore,
        request: CheckoutRequest,
        totals: CartTotals,
    ) -> PaymentStatus:
        if request.payment_method == PaymentMethod.COD:
            return PaymentStatus.PENDING

        if request.payment_method == PaymentMethod.ONLINE:
            outcome = await self.payment_gateway.confirm_payment(
                totals.total,
                cart.cart_id,
                timeout=self.settings.payment_timeout_seconds,
            )
            if outcome != PaymentOutcome.CONFIRMED:
                logger.info(f"Payment for cart {cart.cart_id} not completed: {outcome.value}")
                raise PaymentError(outcome)
            return PaymentStatus.PAID

        raise ValueError(f"Unknown payment method: {request.payment_method}")
