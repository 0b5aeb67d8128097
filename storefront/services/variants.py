"""
Variant Resolver

Determines the unit price and the cart identity key for a product and an
optional selected variant.
"""

from typing import Optional

from ..models.product import Product, ProductVariant


def make_cart_key(product_id: str, variant: Optional[ProductVariant] = None) -> str:
    """Cart identity key: the product id, suffixed with the variant label if any"""
    if variant is not None and not variant.synthesized:
        return f"{product_id}-{variant.weight}"
    return product_id


def resolve_unit_price_and_key(
    product: Product,
    selected_variant: Optional[ProductVariant] = None,
) -> tuple[float, str]:
    """
    Resolve ``(unit_price, cart_key)`` for an add-to-cart.

    A selected variant is taken as-is; it is not checked against
    ``product.variants``. Sale discounts are not applied here.

    Args:
        product: Product being added
        selected_variant: Variant chosen by the shopper, if any

    Returns:
        Tuple of (unit price, cart key)
    """
    if selected_variant is not None and not selected_variant.synthesized:
        return selected_variant.price, make_cart_key(product.id, selected_variant)
    return product.price, product.id


def find_variant(product: Product, label: Optional[str]) -> Optional[ProductVariant]:
    """
    Look up a real variant of ``product`` by label.

    Returns None for an empty label. Raises ValueError when the label is
    not one of the product's variants.
    """
    if not label:
        return None
    variant = product.get_variant(label)
    if variant is None or variant.synthesized:
        raise ValueError(f"Variant '{label}' is not available for {product.name}")
    return variant
