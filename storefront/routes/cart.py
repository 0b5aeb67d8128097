"""Cart API routes"""

from fastapi import APIRouter, Depends, HTTPException

from ..core.config import Settings
from ..database.carts import CartDatabase, CartStore
from ..database.products import ProductDatabase
from ..models.cart import AddToCartRequest, CartResponse, UpdateCartItemRequest
from ..services.variants import find_variant
from .dependencies import get_cart_db, get_cart_or_404, get_product_db, get_settings_dep

router = APIRouter(prefix="/api/cart", tags=["Cart"])


@router.post("", response_model=CartResponse)
async def create_cart(
    cart_db: CartDatabase = Depends(get_cart_db),
    settings: Settings = Depends(get_settings_dep),
):
    """Create a new shopping cart"""
    cart = cart_db.create_cart()
    return CartResponse(cart=cart.to_cart(settings.currency), message="Cart created")


@router.get("/{cart_id}", response_model=CartResponse)
async def get_cart(
    cart: CartStore = Depends(get_cart_or_404),
    settings: Settings = Depends(get_settings_dep),
):
    """Get cart by ID"""
    return CartResponse(cart=cart.to_cart(settings.currency))


@router.post("/{cart_id}/items", response_model=CartResponse)
async def add_to_cart(
    request: AddToCartRequest,
    cart: CartStore = Depends(get_cart_or_404),
    product_db: ProductDatabase = Depends(get_product_db),
    settings: Settings = Depends(get_settings_dep),
):
    """Add one unit of a product to the cart"""
    product = product_db.get_product(request.product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    if not product.in_stock:
        raise HTTPException(status_code=400, detail=f"{product.name} is out of stock")

    try:
        variant = find_variant(product, request.variant)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    item = cart.add_to_cart(product, variant)
    variant_label = f" ({item.selected_variant.weight})" if item.selected_variant else ""
    return CartResponse(
        cart=cart.to_cart(settings.currency),
        message=f"{product.name}{variant_label} has been added to your cart",
    )


@router.put("/{cart_id}/items/{cart_key}", response_model=CartResponse)
async def update_cart_item(
    cart_key: str,
    request: UpdateCartItemRequest,
    cart: CartStore = Depends(get_cart_or_404),
    settings: Settings = Depends(get_settings_dep),
):
    """Set item quantity; zero or less removes the item"""
    changed = cart.update_quantity(cart_key, request.quantity)
    if not changed:
        message = "Item not in cart"
    elif request.quantity <= 0:
        message = "Item removed"
    else:
        message = "Cart updated"
    return CartResponse(cart=cart.to_cart(settings.currency), message=message)


@router.delete("/{cart_id}/items/{cart_key}", response_model=CartResponse)
async def remove_from_cart(
    cart_key: str,
    cart: CartStore = Depends(get_cart_or_404),
    settings: Settings = Depends(get_settings_dep),
):
    """Remove an item from the cart"""
    removed = cart.remove_from_cart(cart_key)
    return CartResponse(
        cart=cart.to_cart(settings.currency),
        message="Item removed" if removed else "Item not in cart",
    )


@router.delete("/{cart_id}", response_model=CartResponse)
async def clear_cart(
    cart: CartStore = Depends(get_cart_or_404),
    settings: Settings = Depends(get_settings_dep),
):
    """Clear all items from cart"""
    cart.clear_cart()
    return CartResponse(cart=cart.to_cart(settings.currency), message="Cart cleared")
