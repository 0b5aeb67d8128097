"""Cart storage for the storefront"""

import logging
import uuid
from datetime import datetime
from typing import Callable, Optional

from ..models.cart import Cart, CartItem, CartLine, CartTotals
from ..models.checkout import DeliveryType
from ..models.product import Product, ProductVariant, SelectedVariant
from ..services import pricing
from ..services.variants import resolve_unit_price_and_key

logger = logging.getLogger(__name__)

ItemAddedListener = Callable[[CartItem], None]


class CartStore:
    """
    In-memory shopping cart for a single session.

    Line items are kept in insertion order and are unique per cart key.
    Mutations never raise: unknown keys are no-ops, reported through the
    boolean return value.
    """

    def __init__(
        self,
        cart_id: Optional[str] = None,
        free_shipping_threshold: float = pricing.FREE_SHIPPING_THRESHOLD,
        flat_shipping_fee: float = pricing.FLAT_SHIPPING_FEE,
    ):
        now = datetime.utcnow()
        self.cart_id = cart_id or str(uuid.uuid4())
        self.free_shipping_threshold = free_shipping_threshold
        self.flat_shipping_fee = flat_shipping_fee
        self.created_at = now
        self.updated_at = now
        self._items: list[CartItem] = []
        self._listeners: list[ItemAddedListener] = []

    @property
    def items(self) -> list[CartItem]:
        return list(self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    def add_listener(self, listener: ItemAddedListener) -> None:
        """Register a callback fired after every successful add"""
        self._listeners.append(listener)

    def get_item(self, cart_key: str) -> Optional[CartItem]:
        return next((item for item in self._items if item.cart_key == cart_key), None)

    def add_to_cart(
        self,
        product: Product,
        variant: Optional[ProductVariant] = None,
    ) -> CartItem:
        """Add one unit of a product (or one of its variants) to the cart"""
        unit_price, cart_key = resolve_unit_price_and_key(product, variant)

        item = self.get_item(cart_key)
        if item:
            item.quantity += 1
        else:
            selected = None
            if cart_key != product.id:
                selected = SelectedVariant(weight=variant.weight, price=variant.price)
            item = CartItem(
                product_id=product.id,
                product_name=product.name,
                image_url=product.image_url,
                unit_price=unit_price,
                quantity=1,
                selected_variant=selected,
            )
            self._items.append(item)

        self._touch()
        self._notify_added(item)
        return item

    def update_quantity(self, cart_key: str, quantity: int) -> bool:
        """Set a line's quantity; zero or less removes the line"""
        if quantity <= 0:
            return self.remove_from_cart(cart_key)

        item = self.get_item(cart_key)
        if not item:
            logger.debug(f"Cart {self.cart_id}: no line for {cart_key}, quantity unchanged")
            return False

        item.quantity = quantity
        self._touch()
        return True

    def remove_from_cart(self, cart_key: str) -> bool:
        """Remove a line from the cart"""
        remaining = [item for item in self._items if item.cart_key != cart_key]
        if len(remaining) == len(self._items):
            logger.debug(f"Cart {self.cart_id}: no line for {cart_key}, nothing removed")
            return False

        self._items = remaining
        self._touch()
        return True

    def clear_cart(self) -> None:
        """Remove every line"""
        self._items = []
        self._touch()

    def get_item_count(self) -> int:
        return sum(item.quantity for item in self._items)

    def get_total(self) -> float:
        """Subtotal from the prices stored on each line"""
        return sum(item.effective_price * item.quantity for item in self._items)

    def get_shipping_cost(self) -> float:
        """Shipping fee assuming home delivery"""
        return pricing.shipping_cost(
            self.get_total(),
            threshold=self.free_shipping_threshold,
            fee=self.flat_shipping_fee,
        )

    def get_totals(self, delivery_type: Optional[DeliveryType] = None) -> CartTotals:
        """
        Aggregate totals for display or checkout.

        Self-pickup orders never pay shipping; any other delivery type
        (or none) uses the threshold rule.
        """
        subtotal = self.get_total()
        if delivery_type == DeliveryType.SELF_PICKUP:
            shipping = 0
        else:
            shipping = self.get_shipping_cost()
        return CartTotals(
            item_count=self.get_item_count(),
            subtotal=subtotal,
            shipping_cost=shipping,
            total=subtotal + shipping,
            amount_to_free_shipping=pricing.amount_to_free_shipping(
                subtotal, self.free_shipping_threshold
            ),
        )

    def to_cart(self, currency: str = "INR") -> Cart:
        return Cart(
            cart_id=self.cart_id,
            items=[CartLine.from_item(item) for item in self._items],
            totals=self.get_totals(),
            currency=currency,
        )

    def _touch(self) -> None:
        self.updated_at = datetime.utcnow()

    def _notify_added(self, item: CartItem) -> None:
        variant_label = f" ({item.selected_variant.weight})" if item.selected_variant else ""
        logger.info(
            f"Cart {self.cart_id}: {item.product_name}{variant_label} added, "
            f"quantity now {item.quantity}"
        )
        for listener in self._listeners:
            listener(item)


class CartDatabase:
    """Registry of active carts, keyed by cart id"""

    def __init__(
        self,
        free_shipping_threshold: float = pricing.FREE_SHIPPING_THRESHOLD,
        flat_shipping_fee: float = pricing.FLAT_SHIPPING_FEE,
    ):
        self.free_shipping_threshold = free_shipping_threshold
        self.flat_shipping_fee = flat_shipping_fee
        self.carts: dict[str, CartStore] = {}

    def create_cart(self) -> CartStore:
        """Create a new cart"""
        cart = CartStore(
            free_shipping_threshold=self.free_shipping_threshold,
            flat_shipping_fee=self.flat_shipping_fee,
        )
        self.carts[cart.cart_id] = cart
        return cart

    def get_cart(self, cart_id: str) -> Optional[CartStore]:
        """Get a cart by ID"""
        return self.carts.get(cart_id)

    def get_or_create_cart(self, cart_id: Optional[str] = None) -> CartStore:
        """Get existing cart or create new one"""
        if cart_id and cart_id in self.carts:
            return self.carts[cart_id]
        return self.create_cart()

    def delete_cart(self, cart_id: str) -> bool:
        """Delete a cart"""
        if cart_id in self.carts:
            del self.carts[cart_id]
            return True
        return False
