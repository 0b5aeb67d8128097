"""Product models for the storefront catalog"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

DEFAULT_VARIANT_LABEL = "default"


class DiscountType(str, Enum):
    AMOUNT = "amount"
    PERCENTAGE = "percentage"


class ProductVariant(BaseModel):
    """Purchasable size/weight option of a product"""
    weight: str = Field(min_length=1)
    price: float = Field(gt=0)
    stock_quantity: Optional[int] = Field(default=None, ge=0)
    is_default: bool = False
    synthesized: bool = False


class SelectedVariant(BaseModel):
    """Variant reference kept on cart lines and order items"""
    weight: str
    price: float

    class Config:
        frozen = True


class Product(BaseModel):
    """
    Product in the catalog.

    The variant list is never empty: a product created without variants
    gets a single synthesized default variant priced at ``base_price``.
    """
    id: str
    name: str
    base_price: float = Field(gt=0)
    category: str
    description: str = ""
    image_url: Optional[str] = None
    variants: list[ProductVariant] = []
    in_stock: bool = True
    is_on_sale: bool = False
    discount_amount: float = Field(default=0, ge=0)
    discount_type: DiscountType = DiscountType.AMOUNT
    sale_end_time: Optional[datetime] = None
    total_stock: Optional[int] = Field(default=None, ge=0)

    class Config:
        from_attributes = True

    @model_validator(mode="after")
    def _normalize_variants(self) -> "Product":
        if not self.variants:
            self.variants = [
                ProductVariant(
                    weight=DEFAULT_VARIANT_LABEL,
                    price=self.base_price,
                    is_default=True,
                    synthesized=True,
                )
            ]
            return self

        labels = [v.weight for v in self.variants]
        duplicates = sorted({label for label in labels if labels.count(label) > 1})
        if duplicates:
            raise ValueError(
                f"Duplicate variant labels for product {self.id}: {', '.join(duplicates)}"
            )
        return self

    @property
    def default_variant(self) -> ProductVariant:
        return next((v for v in self.variants if v.is_default), self.variants[0])

    @property
    def price(self) -> float:
        """Unit price used when no variant is selected"""
        return self.default_variant.price

    def get_variant(self, weight: str) -> Optional[ProductVariant]:
        """Look a variant up by its label"""
        return next((v for v in self.variants if v.weight == weight), None)


class ProductView(BaseModel):
    """Product as shown on listing/detail pages, with sale pricing applied"""
    product: Product
    price: float
    final_price: float
    sale_active: bool
    sale_seconds_remaining: Optional[int] = None


class ProductSearchResponse(BaseModel):
    """Response from product search"""
    products: list[ProductView]
    total: int
    limit: int
    offset: int
