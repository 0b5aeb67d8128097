"""
Storefront Application

Product catalog, cart and checkout API for a direct-to-consumer store.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .core.config import Settings, get_settings
from .database.carts import CartDatabase
from .database.orders import OrderDatabase
from .database.products import ProductDatabase
from .routes import products_router, cart_router, checkout_router
from .services.checkout import CheckoutOrchestrator
from .services.payments import AutoConfirmGateway, ManualPaymentGateway, PaymentGateway

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    settings: Settings = app.state.settings
    logger.info(f"{settings.app_name} starting up...")
    logger.info(
        f"Free shipping from {settings.currency_symbol}{settings.free_shipping_threshold:g}, "
        f"payments: {'auto-confirm' if settings.auto_confirm_payments else 'manual'}"
    )
    yield
    logger.info(f"{settings.app_name} shutting down...")


def create_app(
    settings: Optional[Settings] = None,
    product_db: Optional[ProductDatabase] = None,
    order_db: Optional[OrderDatabase] = None,
    payment_gateway: Optional[PaymentGateway] = None,
) -> FastAPI:
    """Build the application and the stores it owns"""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Storefront catalog, cart and checkout API",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if payment_gateway is None:
        if settings.auto_confirm_payments:
            payment_gateway = AutoConfirmGateway()
        else:
            payment_gateway = ManualPaymentGateway()

    app.state.settings = settings
    app.state.product_db = product_db or ProductDatabase()
    app.state.cart_db = CartDatabase(
        free_shipping_threshold=settings.free_shipping_threshold,
        flat_shipping_fee=settings.flat_shipping_fee,
    )
    app.state.order_db = order_db or OrderDatabase()
    app.state.payment_gateway = payment_gateway
    app.state.orchestrator = CheckoutOrchestrator(
        order_store=app.state.order_db,
        payment_gateway=payment_gateway,
        settings=settings,
    )

    app.include_router(products_router)
    app.include_router(cart_router)
    app.include_router(checkout_router)

    @app.get("/")
    async def home():
        return {
            "message": f"{settings.app_name} API",
            "docs": "/docs",
            "endpoints": {
                "products": "/api/products",
                "cart": "/api/cart",
                "checkout": "/api/checkout",
            },
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": "storefront"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
