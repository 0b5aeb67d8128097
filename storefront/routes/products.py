"""Product API routes"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..database.products import ProductDatabase
from ..models.product import Product, ProductSearchResponse, ProductView
from ..services import pricing
from .dependencies import get_product_db

router = APIRouter(prefix="/api/products", tags=["Products"])


def to_view(product: Product) -> ProductView:
    """Listing/detail view with the current sale price"""
    remaining = pricing.sale_time_remaining(product)
    return ProductView(
        product=product,
        price=product.price,
        final_price=pricing.final_price(product.price, product),
        sale_active=pricing.is_sale_active(product),
        sale_seconds_remaining=int(remaining.total_seconds()) if remaining else None,
    )


@router.get("", response_model=ProductSearchResponse)
async def search_products(
    query: Optional[str] = Query(None, description="Search query"),
    category: Optional[str] = Query(None, description="Filter by category"),
    in_stock_only: bool = Query(True, description="Only show in-stock items"),
    limit: int = Query(20, ge=1, le=100, description="Max results"),
    offset: int = Query(0, ge=0, description="Offset for pagination"),
    product_db: ProductDatabase = Depends(get_product_db),
):
    """Search products in the catalog"""
    products, total = product_db.search_products(
        query=query,
        category=category,
        in_stock_only=in_stock_only,
        limit=limit,
        offset=offset,
    )

    return ProductSearchResponse(
        products=[to_view(p) for p in products],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/categories", response_model=list[str])
async def list_categories(product_db: ProductDatabase = Depends(get_product_db)):
    """List all product categories"""
    return product_db.list_categories()


@router.get("/{product_id}", response_model=ProductView)
async def get_product(
    product_id: str,
    product_db: ProductDatabase = Depends(get_product_db),
):
    """Get a product by ID, with sale pricing applied"""
    product = product_db.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return to_view(product)
