"""Request-scoped access to the stores owned by the application"""

from fastapi import HTTPException, Request

from ..core.config import Settings
from ..database.carts import CartDatabase, CartStore
from ..database.orders import OrderDatabase
from ..database.products import ProductDatabase
from ..services.checkout import CheckoutOrchestrator
from ..services.payments import PaymentGateway


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_product_db(request: Request) -> ProductDatabase:
    return request.app.state.product_db


def get_cart_db(request: Request) -> CartDatabase:
    return request.app.state.cart_db


def get_order_db(request: Request) -> OrderDatabase:
    return request.app.state.order_db


def get_payment_gateway(request: Request) -> PaymentGateway:
    return request.app.state.payment_gateway


def get_orchestrator(request: Request) -> CheckoutOrchestrator:
    return request.app.state.orchestrator


def get_cart_or_404(cart_id: str, request: Request) -> CartStore:
    """Resolve the cart from the path, 404 if unknown"""
    cart = get_cart_db(request).get_cart(cart_id)
    if not cart:
        raise HTTPException(status_code=404, detail="Cart not found")
    return cart
