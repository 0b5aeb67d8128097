"""Checkout API routes"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from ..core.config import Settings
from ..database.carts import CartDatabase, CartStore
from ..database.orders import OrderDatabase
from ..models.checkout import (
    CheckoutRequest,
    CheckoutResponse,
    DeliveryType,
    Order,
    PaymentRequest,
    SalesSummary,
    UpdateOrderStatusRequest,
)
from ..services.checkout import (
    CheckoutError,
    CheckoutOrchestrator,
    CheckoutValidationError,
    OrderPlacementError,
    PaymentError,
    compute_totals,
)
from ..services.payments import ManualPaymentGateway, PaymentGateway, build_upi_uri
from .dependencies import (
    get_cart_db,
    get_cart_or_404,
    get_orchestrator,
    get_order_db,
    get_payment_gateway,
    get_settings_dep,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/checkout", tags=["Checkout"])


def _error_detail(error: CheckoutError, messages: Optional[list[str]] = None) -> dict:
    return {"errors": messages or [str(error)], "retryable": error.retryable}


@router.post("", response_model=CheckoutResponse)
async def checkout(
    request: CheckoutRequest,
    cart_db: CartDatabase = Depends(get_cart_db),
    orchestrator: CheckoutOrchestrator = Depends(get_orchestrator),
):
    """
    Process checkout.

    Cash-on-delivery orders are placed immediately with payment pending.
    Online orders wait for the payment confirmation signal
    (``POST /api/checkout/payments/{cart_id}/confirm``) before the order
    is placed as paid.
    """
    cart = cart_db.get_cart(request.cart_id)
    if not cart:
        raise HTTPException(status_code=404, detail="Cart not found")

    try:
        result = await orchestrator.submit(cart, request)
    except CheckoutValidationError as e:
        raise HTTPException(status_code=400, detail=_error_detail(e, e.errors))
    except PaymentError as e:
        raise HTTPException(status_code=402, detail=_error_detail(e))
    except OrderPlacementError as e:
        raise HTTPException(status_code=503, detail=_error_detail(e))
    except CheckoutError as e:
        raise HTTPException(status_code=400, detail=_error_detail(e))

    return CheckoutResponse(
        success=True,
        order=result.order,
        display_order_id=result.display_order_id,
        message=result.message,
    )


@router.get("/payments/{cart_id}", response_model=PaymentRequest)
async def payment_request(
    delivery_type: DeliveryType = DeliveryType.SHIPPING,
    cart: CartStore = Depends(get_cart_or_404),
    settings: Settings = Depends(get_settings_dep),
):
    """
    Amount and UPI link to show on the payment screen.

    The amount matches what an online checkout of this cart waits for, and
    the cart id is the reference to confirm or cancel.
    """
    if cart.is_empty:
        raise HTTPException(status_code=400, detail="Your cart is empty")

    amount = compute_totals(cart, delivery_type).total
    return PaymentRequest(
        reference=cart.cart_id,
        amount=amount,
        currency=settings.currency,
        payee=settings.upi_payee,
        upi_uri=build_upi_uri(settings.upi_payee, settings.store_name, amount, settings.currency),
        timeout_seconds=settings.payment_timeout_seconds,
    )


@router.post("/payments/{reference}/confirm")
async def confirm_payment(
    reference: str,
    gateway: PaymentGateway = Depends(get_payment_gateway),
):
    """Shopper reports the UPI payment as completed"""
    if not isinstance(gateway, ManualPaymentGateway) or not gateway.confirm(reference):
        raise HTTPException(status_code=404, detail="No payment awaiting confirmation")
    return {"reference": reference, "status": "confirmed"}


@router.post("/payments/{reference}/cancel")
async def cancel_payment(
    reference: str,
    gateway: PaymentGateway = Depends(get_payment_gateway),
):
    """Shopper backs out of the payment screen"""
    if not isinstance(gateway, ManualPaymentGateway) or not gateway.cancel(reference):
        raise HTTPException(status_code=404, detail="No payment awaiting confirmation")
    return {"reference": reference, "status": "cancelled"}


@router.get("/orders", response_model=list[Order])
async def list_orders(
    limit: int = 50,
    order_db: OrderDatabase = Depends(get_order_db),
):
    """List recent orders"""
    return order_db.list_orders(limit=limit)


@router.get("/orders/summary", response_model=SalesSummary)
async def sales_summary(order_db: OrderDatabase = Depends(get_order_db)):
    """Revenue and order counts for the seller dashboard"""
    return order_db.get_sales_summary()


@router.get("/orders/{order_id}", response_model=Order)
async def get_order(
    order_id: str,
    order_db: OrderDatabase = Depends(get_order_db),
):
    """Get order details"""
    order = order_db.get_order(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.put("/orders/{order_id}/status", response_model=Order)
async def update_order_status(
    order_id: str,
    request: UpdateOrderStatusRequest,
    order_db: OrderDatabase = Depends(get_order_db),
):
    """Move an order through its lifecycle"""
    order = order_db.update_status(order_id, request.status)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order
