"""
test_cart_store.py — Cart Store mutations and derived totals.
Run: pytest tests/test_cart_store.py -v
"""
from storefront.database.carts import CartDatabase, CartStore
from storefront.models.checkout import DeliveryType
from storefront.models.product import Product, ProductVariant


def make_product(pid, price, variants=None):
    return Product(id=pid, name=f"Product {pid}", base_price=price, category="Groceries",
                   variants=variants or [])


# ── Add / merge ───────────────────────────────────────────────────

def test_repeated_adds_merge_into_one_line(cart, plain_product):
    for _ in range(5):
        cart.add_to_cart(plain_product)

    assert len(cart.items) == 1
    assert cart.items[0].cart_key == "A"
    assert cart.items[0].quantity == 5


def test_repeated_variant_adds_merge(cart, turmeric):
    variant = turmeric.get_variant("250g")
    cart.add_to_cart(turmeric, variant)
    cart.add_to_cart(turmeric, variant)
    cart.add_to_cart(turmeric, variant)

    assert [(i.cart_key, i.quantity) for i in cart.items] == [("T-250g", 3)]


def test_distinct_variants_are_distinct_lines(cart, turmeric):
    cart.add_to_cart(turmeric, turmeric.get_variant("100g"))
    cart.add_to_cart(turmeric, turmeric.get_variant("250g"))

    assert [i.cart_key for i in cart.items] == ["T-100g", "T-250g"]
    assert cart.get_item_count() == 2


def test_variant_line_carries_variant_price(cart, turmeric):
    item = cart.add_to_cart(turmeric, turmeric.get_variant("250g"))

    assert item.unit_price == 120
    assert item.selected_variant.weight == "250g"
    assert item.selected_variant.price == 120


def test_plain_and_variant_lines_scenario(cart):
    product = make_product("A", 60, [
        ProductVariant(weight="default-pack", price=60, is_default=True),
        ProductVariant(weight="100g", price=120),
    ])
    cart.add_to_cart(product)
    cart.add_to_cart(product, product.get_variant("100g"))

    assert len(cart.items) == 2
    assert cart.get_item_count() == 2
    assert cart.get_total() == 180



def test_plain_product_then_explicit_variant(cart):
    product = make_product("A", 60)
    cart.add_to_cart(product)
    cart.add_to_cart(product, ProductVariant(weight="100g", price=120))

    assert [i.cart_key for i in cart.items] == ["A", "A-100g"]
    assert [i.unit_price for i in cart.items] == [60, 120]
    assert cart.get_item_count() == 2
    assert cart.get_total() == 180


def test_insertion_order_preserved_on_merge(cart):
    a, b, c = make_product("a", 10), make_product("b", 20), make_product("c", 30)
    cart.add_to_cart(a)
    cart.add_to_cart(b)
    cart.add_to_cart(c)
    cart.add_to_cart(a)

    assert [i.product_id for i in cart.items] == ["a", "b", "c"]


def test_every_add_notifies_listeners(cart, plain_product):
    seen = []
    cart.add_listener(lambda item: seen.append((item.cart_key, item.quantity)))

    cart.add_to_cart(plain_product)
    cart.add_to_cart(plain_product)

    assert seen == [("A", 1), ("A", 2)]


# ── Update / remove / clear ───────────────────────────────────────

def test_update_quantity_sets_absolute_value(cart, plain_product):
    cart.add_to_cart(plain_product)
    cart.add_to_cart(plain_product)

    assert cart.update_quantity("A", 7) is True
    assert cart.get_item("A").quantity == 7


def test_update_quantity_zero_or_negative_removes(cart):
    cart.add_to_cart(make_product("x", 10))
    cart.add_to_cart(make_product("y", 10))
    cart.add_to_cart(make_product("y", 10))

    assert cart.update_quantity("x", 0) is True
    assert cart.get_item("x") is None
    assert cart.update_quantity("y", -5) is True
    assert cart.is_empty
    assert cart.get_item_count() == 0


def test_update_unknown_key_is_noop(cart, plain_product):
    cart.add_to_cart(plain_product)

    assert cart.update_quantity("missing", 3) is False
    assert cart.get_item("A").quantity == 1


def test_remove_keeps_other_lines_in_order(cart):
    for pid in ("a", "b", "c"):
        cart.add_to_cart(make_product(pid, 10))

    assert cart.remove_from_cart("b") is True
    assert [i.product_id for i in cart.items] == ["a", "c"]
    assert cart.remove_from_cart("b") is False


def test_clear_is_idempotent(cart, plain_product):
    cart.add_to_cart(plain_product)
    cart.clear_cart()
    assert cart.get_item_count() == 0
    cart.clear_cart()
    assert cart.get_item_count() == 0


# ── Totals ────────────────────────────────────────────────────────

def test_subtotal(cart):
    sixty = make_product("p60", 60)
    hundred = make_product("p100", 100)
    cart.add_to_cart(sixty)
    cart.add_to_cart(sixty)
    cart.add_to_cart(hundred)

    assert cart.get_total() == 220


def test_empty_cart_totals(cart):
    assert cart.get_item_count() == 0
    assert cart.get_total() == 0


def test_shipping_threshold_boundary(cart):
    cart.add_to_cart(make_product("p", 199))
    assert cart.get_total() == 199
    assert cart.get_shipping_cost() == 100

    cart.clear_cart()
    cart.add_to_cart(make_product("q", 200))
    assert cart.get_total() == 200
    assert cart.get_shipping_cost() == 0


def test_catalog_price_change_does_not_reprice_cart(cart):
    product = make_product("p", 50)
    cart.add_to_cart(product)

    repriced = make_product("p", 80)
    assert cart.get_total() == 50
    cart.add_to_cart(repriced)
    assert cart.get_item("p").quantity == 2
    assert cart.get_total() == 100


def test_totals_by_delivery_type(cart):
    cart.add_to_cart(make_product("p", 150))

    shipping = cart.get_totals(DeliveryType.SHIPPING)
    assert (shipping.subtotal, shipping.shipping_cost, shipping.total) == (150, 100, 250)
    assert shipping.amount_to_free_shipping == 50

    pickup = cart.get_totals(DeliveryType.SELF_PICKUP)
    assert (pickup.subtotal, pickup.shipping_cost, pickup.total) == (150, 0, 150)
    # The store itself always assumes shipping
    assert cart.get_shipping_cost() == 100


def test_custom_shipping_rules():
    cart = CartStore(free_shipping_threshold=500, flat_shipping_fee=40)
    cart.add_to_cart(make_product("p", 300))

    assert cart.get_shipping_cost() == 40


# ── Cart registry ─────────────────────────────────────────────────

def test_cart_database_lifecycle():
    carts = CartDatabase()
    cart = carts.create_cart()

    assert carts.get_cart(cart.cart_id) is cart
    assert carts.get_or_create_cart(cart.cart_id) is cart
    assert carts.get_or_create_cart("unknown") is not cart
    assert carts.delete_cart(cart.cart_id) is True
    assert carts.get_cart(cart.cart_id) is None
    assert carts.delete_cart(cart.cart_id) is False


def test_to_cart_serializes_lines(cart, turmeric):
    cart.add_to_cart(turmeric, turmeric.get_variant("250g"))
    cart.add_to_cart(turmeric, turmeric.get_variant("250g"))

    snapshot = cart.to_cart()
    assert snapshot.cart_id == "cart-1"
    assert snapshot.items[0].cart_key == "T-250g"
    assert snapshot.items[0].total_price == 240
    assert snapshot.totals.shipping_cost == 0
