"""In-memory product catalog"""

from typing import Optional

from ..models.product import DiscountType, Product, ProductVariant

CATEGORIES = [
    "Groceries",
    "Spices",
    "Snacks",
    "Beverages",
    "Personal Care",
    "Home Essentials",
]

# Seed catalog
PRODUCTS: dict[str, Product] = {
    "1": Product(
        id="1",
        name="Organic Turmeric Powder",
        base_price=120,
        category="Spices",
        description="Pure organic turmeric powder, perfect for cooking and health benefits",
        image_url="https://images.unsplash.com/photo-1615485500704-8e990f9900f7?w=400",
        variants=[
            ProductVariant(weight="100g", price=60, is_default=True),
            ProductVariant(weight="250g", price=120),
            ProductVariant(weight="500g", price=220),
        ],
        is_on_sale=True,
        discount_amount=10,
        discount_type=DiscountType.PERCENTAGE,
    ),
    "2": Product(
        id="2",
        name="Premium Basmati Rice",
        base_price=280,
        category="Groceries",
        description="Long grain premium basmati rice, aged for perfect aroma",
        image_url="https://images.unsplash.com/photo-1586201375761-83865001e31c?w=400",
        variants=[
            ProductVariant(weight="1kg", price=280, is_default=True),
            ProductVariant(weight="5kg", price=1300),
        ],
    ),
    "3": Product(
        id="3",
        name="Homemade Murukku",
        base_price=150,
        category="Snacks",
        description="Crispy traditional murukku made with love",
        image_url="https://images.unsplash.com/photo-1601050690117-94f5f6fa8bd7?w=400",
    ),
    "4": Product(
        id="4",
        name="Filter Coffee Powder",
        base_price=200,
        category="Beverages",
        description="Authentic South Indian filter coffee blend",
        image_url="https://images.unsplash.com/photo-1559056199-641a0ac8b55e?w=400",
        is_on_sale=True,
        discount_amount=20,
        discount_type=DiscountType.AMOUNT,
    ),
    "5": Product(
        id="5",
        name="Natural Coconut Oil",
        base_price=350,
        category="Personal Care",
        description="Cold-pressed virgin coconut oil for hair and skin",
        image_url="https://images.unsplash.com/photo-1526947425960-945c6e72858f?w=400",
        variants=[
            ProductVariant(weight="500ml", price=350, is_default=True),
            ProductVariant(weight="1l", price=650),
        ],
    ),
    "6": Product(
        id="6",
        name="Handmade Agarbatti",
        base_price=80,
        category="Home Essentials",
        description="Hand-rolled incense sticks with natural fragrances",
    ),
    "7": Product(
        id="7",
        name="Red Chilli Powder",
        base_price=95,
        category="Spices",
        description="Sun-dried red chillies, stone ground",
        in_stock=False,
    ),
    "8": Product(
        id="8",
        name="Organic Jaggery",
        base_price=110,
        category="Groceries",
        description="Unrefined cane jaggery",
    ),
}


class ProductDatabase:
    """In-memory product database"""

    def __init__(self, products: Optional[dict[str, Product]] = None):
        self.products = dict(products if products is not None else PRODUCTS)

    def get_product(self, product_id: str) -> Optional[Product]:
        """Get a product by ID"""
        return self.products.get(product_id)

    def search_products(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
        in_stock_only: bool = True,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Product], int]:
        """
        Search products with filters.

        Returns:
            Tuple of (matching products, total count)
        """
        results = list(self.products.values())

        if query:
            query_lower = query.lower()
            results = [
                p for p in results
                if query_lower in p.name.lower() or query_lower in p.description.lower()
            ]

        if category:
            results = [p for p in results if p.category.lower() == category.lower()]

        if in_stock_only:
            results = [p for p in results if p.in_stock]

        total = len(results)
        return results[offset : offset + limit], total

    def get_all_products(self) -> list[Product]:
        """Get all products"""
        return list(self.products.values())

    def list_categories(self) -> list[str]:
        known = list(CATEGORIES)
        extra = sorted({p.category for p in self.products.values()} - set(known))
        return known + extra
