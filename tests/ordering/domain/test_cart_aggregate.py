"""Tests for the Cart snapshot and its lines."""

import pytest
from ordering.cart.cart import MAX_QUANTITY, Cart, CartLine
from protean.exceptions import ValidationError
from shared.errors import InvalidArgumentError


class TestCartLine:
    def test_line_holds_product_and_quantity(self):
        line = CartLine(product_id=7, quantity=2)
        assert (line.product_id, line.quantity) == (7, 2)

    @pytest.mark.parametrize("quantity", [0, -1, MAX_QUANTITY + 1])
    def test_line_quantity_must_fit_the_column(self, quantity):
        with pytest.raises(ValidationError) as exc:
            CartLine(product_id=7, quantity=quantity)
        assert "quantity" in exc.value.messages

    def test_lines_with_equal_values_are_equal(self):
        assert CartLine(product_id=7, quantity=2) == CartLine(product_id=7, quantity=2)
        assert CartLine(product_id=7, quantity=2) != CartLine(product_id=7, quantity=3)


class TestCart:
    def test_cart_without_lines_is_empty(self):
        cart = Cart(user_id=1)
        assert cart.is_empty
        assert len(cart) == 0
        assert cart.product_ids == []

    def test_lines_are_kept_in_product_id_order(self):
        cart = Cart(
            user_id=1,
            lines=(
                CartLine(product_id=9, quantity=1),
                CartLine(product_id=3, quantity=4),
                CartLine(product_id=7, quantity=2),
            ),
        )
        assert cart.product_ids == [3, 7, 9]

    def test_one_line_per_product(self):
        with pytest.raises(InvalidArgumentError):
            Cart(user_id=1, lines=(CartLine(product_id=7, quantity=1), CartLine(product_id=7, quantity=2)))

    def test_quantity_of(self):
        cart = Cart(user_id=1, lines=(CartLine(product_id=7, quantity=2),))
        assert cart.quantity_of(7) == 2
        assert cart.quantity_of(8) == 0

    def test_items_are_keyed_by_product(self):
        line = CartLine(product_id=7, quantity=2)
        cart = Cart(user_id=1, lines=(line,))
        assert cart.items == {7: line}
        assert not cart.is_empty
