"""
test_variants.py — Product variant normalization and price/key resolution.
Run: pytest tests/test_variants.py -v
"""
import pytest
from pydantic import ValidationError

from storefront.models.product import DEFAULT_VARIANT_LABEL, Product, ProductVariant
from storefront.services.variants import (
    find_variant,
    make_cart_key,
    resolve_unit_price_and_key,
)


def test_product_without_variants_gets_default(plain_product):
    assert len(plain_product.variants) == 1
    variant = plain_product.variants[0]
    assert variant.weight == DEFAULT_VARIANT_LABEL
    assert variant.synthesized is True
    assert plain_product.price == 60


def test_price_comes_from_default_variant(turmeric):
    assert turmeric.price == 60


def test_first_variant_is_default_when_none_flagged():
    product = Product(
        id="R", name="Rice", base_price=300, category="Groceries",
        variants=[ProductVariant(weight="1kg", price=280), ProductVariant(weight="5kg", price=1300)],
    )
    assert product.price == 280


def test_duplicate_variant_labels_rejected():
    with pytest.raises(ValidationError):
        Product(
            id="R", name="Rice", base_price=300, category="Groceries",
            variants=[ProductVariant(weight="1kg", price=280), ProductVariant(weight="1kg", price=290)],
        )


def test_resolve_without_variant(plain_product):
    assert resolve_unit_price_and_key(plain_product) == (60, "A")


def test_resolve_with_variant(turmeric):
    variant = turmeric.get_variant("250g")
    assert resolve_unit_price_and_key(turmeric, variant) == (120, "T-250g")


def test_resolve_synthesized_variant_behaves_like_none(plain_product):
    assert resolve_unit_price_and_key(plain_product, plain_product.variants[0]) == (60, "A")


def test_resolve_accepts_foreign_variant(plain_product):
    foreign = ProductVariant(weight="1kg", price=500)
    assert resolve_unit_price_and_key(plain_product, foreign) == (500, "A-1kg")


def test_resolve_ignores_sale(sale_product):
    assert resolve_unit_price_and_key(sale_product) == (100, "S")


def test_make_cart_key(turmeric):
    assert make_cart_key("T") == "T"
    assert make_cart_key("T", turmeric.get_variant("100g")) == "T-100g"


def test_find_variant(turmeric, plain_product):
    assert find_variant(turmeric, None) is None
    assert find_variant(turmeric, "100g").price == 60
    with pytest.raises(ValueError):
        find_variant(turmeric, "5kg")
    with pytest.raises(ValueError):
        find_variant(plain_product, DEFAULT_VARIANT_LABEL)
