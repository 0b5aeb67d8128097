"""Cart models for the storefront"""

from typing import Optional

from pydantic import BaseModel, Field

from .product import SelectedVariant


class CartItem(BaseModel):
    """Line item in a shopping cart"""
    product_id: str
    product_name: str
    image_url: Optional[str] = None
    unit_price: float
    quantity: int = Field(gt=0)
    selected_variant: Optional[SelectedVariant] = None

    @property
    def cart_key(self) -> str:
        if self.selected_variant:
            return f"{self.product_id}-{self.selected_variant.weight}"
        return self.product_id

    @property
    def effective_price(self) -> float:
        """Price read back from the line itself, never the live catalog"""
        if self.selected_variant:
            return self.selected_variant.price
        return self.unit_price

    @property
    def total_price(self) -> float:
        return self.effective_price * self.quantity


class CartTotals(BaseModel):
    """Derived cart aggregates"""
    item_count: int = 0
    subtotal: float = 0.0
    shipping_cost: float = 0.0
    total: float = 0.0
    amount_to_free_shipping: float = 0.0


class CartLine(BaseModel):
    """Serialized line item, including its derived fields"""
    cart_key: str
    product_id: str
    product_name: str
    image_url: Optional[str] = None
    unit_price: float
    quantity: int
    selected_variant: Optional[SelectedVariant] = None
    total_price: float

    @classmethod
    def from_item(cls, item: CartItem) -> "CartLine":
        return cls(
            cart_key=item.cart_key,
            product_id=item.product_id,
            product_name=item.product_name,
            image_url=item.image_url,
            unit_price=item.effective_price,
            quantity=item.quantity,
            selected_variant=item.selected_variant,
            total_price=item.total_price,
        )


class Cart(BaseModel):
    """Shopping cart snapshot returned by the API"""
    cart_id: str
    items: list[CartLine] = []
    totals: CartTotals = Field(default_factory=CartTotals)
    currency: str = "INR"


class AddToCartRequest(BaseModel):
    """Request to add one unit of a product (optionally a variant) to the cart"""
    product_id: str
    variant: Optional[str] = None


class UpdateCartItemRequest(BaseModel):
    """Request to set a cart line's quantity; zero or less removes it"""
    quantity: int


class CartResponse(BaseModel):
    """Cart API response"""
    cart: Cart
    message: Optional[str] = None
