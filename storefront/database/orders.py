"""Order storage for the storefront"""

import logging
from datetime import datetime
from typing import Optional

from ..models.checkout import (
    Order,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    SalesSummary,
)
from ..services.order_ids import generate_order_id

logger = logging.getLogger(__name__)


class OrderPersistenceError(Exception):
    """Raised when an order cannot be stored"""


class OrderDatabase:
    """In-memory order storage"""

    def __init__(self):
        self.orders: dict[str, Order] = {}

    def next_order_id(self, now: Optional[datetime] = None) -> str:
        """Compact id for the next order placed on ``now``'s date"""
        now = now or datetime.now()
        today = now.date()
        existing_today = sum(1 for o in self.orders.values() if o.created_at.date() == today)
        return generate_order_id(existing_today, now)

    def save_order(self, order: Order) -> Order:
        """Store an order snapshot"""
        if order.order_id in self.orders:
            raise OrderPersistenceError(f"Order {order.order_id} already exists")
        self.orders[order.order_id] = order
        return order

    def get_order(self, order_id: str) -> Optional[Order]:
        """Get an order by ID"""
        return self.orders.get(order_id)

    def update_status(self, order_id: str, status: OrderStatus) -> Optional[Order]:
        """
        Move an order to a new lifecycle status.

        Delivering a cash-on-delivery order also marks it paid. The stored
        snapshot is replaced by an updated copy.
        """
        order = self.get_order(order_id)
        if not order:
            return None

        updates: dict = {"order_status": status}
        if status == OrderStatus.DELIVERED and order.payment_method == PaymentMethod.COD:
            updates["payment_status"] = PaymentStatus.PAID

        updated = order.model_copy(update=updates)
        self.orders[order_id] = updated
        logger.info(f"Order {order_id} status changed to {status.value}")
        return updated

    def list_orders(self, limit: int = 50) -> list[Order]:
        """List recent orders"""
        orders = list(self.orders.values())
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return orders[:limit]

    def get_sales_summary(self) -> SalesSummary:
        """Revenue and order counts across all stored orders"""
        orders = list(self.orders.values())
        total_revenue = sum(o.total for o in orders)
        total_orders = len(orders)

        by_method: dict[str, float] = {}
        for order in orders:
            label = (
                "Cash on Delivery"
                if order.payment_method == PaymentMethod.COD
                else "Online Payment"
            )
            by_method[label] = by_method.get(label, 0) + order.total

        return SalesSummary(
            total_revenue=total_revenue,
            total_orders=total_orders,
            completed_orders=sum(1 for o in orders if o.order_status == OrderStatus.DELIVERED),
            pending_orders=sum(1 for o in orders if o.order_status == OrderStatus.PENDING),
            avg_order_value=round(total_revenue / total_orders) if total_orders else 0,
            paid_revenue=sum(o.total for o in orders if o.payment_status == PaymentStatus.PAID),
            revenue_by_payment_method=by_method,
        )
