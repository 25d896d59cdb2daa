"""Unit tests for the Cart aggregate."""

import pytest

from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from storefront.domain.model.cart import Cart
from storefront.domain.model.product import Product, Variant
from storefront.domain.model.value_objects import Money


def _milk() -> Product:
    return Product(
        id="7",
        name="Milk",
        price=Money.of("30"),
        stock=5,
        variants=[Variant(id="7-1", label="1 L", price=Money.of("58"), stock=2)],
    )


class TestCartAdd:

    def test_add_new_line_captures_price(self):
        cart = Cart(user_id="u1")
        line = cart.add(_milk().stock_source(), 2)
        assert line.unit_price == Money.of("30")
        assert cart.total_amount == Money.of("60")

    def test_add_merges_same_product_and_variant(self):
        cart = Cart(user_id="u1")
        product = _milk()
        cart.add(product.stock_source(), 1)
        cart.add(product.stock_source(), 2)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3

    def test_variant_and_base_are_separate_lines(self):
        cart = Cart(user_id="u1")
        product = _milk()
        cart.add(product.stock_source(), 1)
        cart.add(product.stock_source("7-1"), 1)
        assert len(cart.items) == 2
        assert cart.total_amount == Money.of("88")

    def test_merged_quantity_is_checked_against_stock(self):
        cart = Cart(user_id="u1")
        product = _milk()
        cart.add(product.stock_source("7-1"), 2)
        with pytest.raises(InsufficientStockError):
            cart.add(product.stock_source("7-1"), 1)
        assert cart.items[0].quantity == 2

    def test_merge_keeps_original_price(self):
        cart = Cart(user_id="u1")
        product = _milk()
        cart.add(product.stock_source(), 1)
        product.update_price(Money.of("35"))
        cart.add(product.stock_source(), 1)
        assert cart.items[0].unit_price == Money.of("30")

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError, match="at least 1"):
            Cart(user_id="u1").add(_milk().stock_source(), 0)

    def test_add_never_holds_stock(self):
        product = _milk()
        Cart(user_id="u1").add(product.stock_source(), 5)
        assert product.stock == 5


class TestCartSetQuantity:

    def test_zero_removes_line(self):
        cart = Cart(user_id="u1")
        cart.add(_milk().stock_source(), 2)
        cart.set_quantity(None, "7", None, 0)
        assert cart.is_empty

    def test_missing_line(self):
        with pytest.raises(EntityNotFoundError, match="Item not found in cart"):
            Cart(user_id="u1").set_quantity(None, "7", None, 0)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Cart(user_id="u1").set_quantity(None, "7", None, -1)

    def test_increase_checked_against_stock(self):
        cart = Cart(user_id="u1")
        product = _milk()
        cart.add(product.stock_source(), 1)
        with pytest.raises(InsufficientStockError):
            cart.set_quantity(product.stock_source(), "7", None, 6)
        cart.set_quantity(product.stock_source(), "7", None, 5)
        assert cart.items[0].quantity == 5


class TestCartRemoveAndClear:

    def test_remove_absent_line_is_noop(self):
        cart = Cart(user_id="u1")
        cart.remove("7")
        assert cart.is_empty

    def test_remove_only_matching_variant(self):
        cart = Cart(user_id="u1")
        product = _milk()
        cart.add(product.stock_source(), 1)
        cart.add(product.stock_source("7-1"), 1)
        cart.remove("7", "7-1")
        assert [line.variant_id for line in cart.items] == [None]

    def test_clear(self):
        cart = Cart(user_id="u1")
        cart.add(_milk().stock_source(), 1)
        cart.clear()
        assert cart.total_amount == Money.zero()
