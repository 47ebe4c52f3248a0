"""Tests for order header and line values."""

import datetime
from decimal import Decimal

import pytest
from identity.customer.profile import ShippingSnapshot
from ordering.order.order import OrderHeader, OrderLine, ShippingAddress
from protean.exceptions import ValidationError


def _line(order_line_id=1, product_id=7, price="19.99", quantity=2, discount="0.00"):
    return OrderLine(
        order_line_id=order_line_id,
        order_id=1,
        product_id=product_id,
        sales_price=Decimal(price),
        quantity=quantity,
        discount=Decimal(discount),
    )


def _header(shipping="0.00", lines=()):
    return OrderHeader(
        order_id=1,
        user_id=1,
        date=datetime.date(2026, 10, 19),
        shipping_address=ShippingAddress(address="1 Main St", city="Springfield", state="IL", zip="62701"),
        shipping_amount=Decimal(shipping),
        lines=tuple(lines),
    )


class TestOrderLine:
    def test_line_total(self):
        assert _line().line_total == Decimal("39.98")

    def test_line_total_applies_discount(self):
        assert _line(price="10.00", quantity=3, discount="50").line_total == Decimal("15.00")


class TestOrderHeader:
    def test_header_without_lines(self):
        header = _header()
        assert header.lines == ()
        assert header.subtotal == Decimal("0.00")

    def test_total_includes_shipping(self):
        lines = [_line(), _line(order_line_id=2, product_id=8, price="1.01", quantity=1)]
        header = _header(shipping="5.00", lines=lines)
        assert header.subtotal == Decimal("40.99")
        assert header.total == Decimal("45.99")

    def test_with_lines_returns_a_new_header(self):
        header = _header()
        populated = header.with_lines([_line()])

        assert header.lines == ()
        assert len(populated.lines) == 1
        assert populated.order_id == header.order_id
        assert populated.shipping_address == header.shipping_address


class TestShippingAddress:
    def test_copied_from_profile_snapshot(self):
        snapshot = ShippingSnapshot(address="1 Main St", city="Springfield", state="IL", zip="62701")
        address = ShippingAddress.from_snapshot(snapshot)
        assert (address.address, address.city, address.state, address.zip) == (
            "1 Main St",
            "Springfield",
            "IL",
            "62701",
        )

    def test_missing_fields_are_allowed(self):
        address = ShippingAddress.from_snapshot(ShippingSnapshot(address=None, city=None, state=None, zip=None))
        assert address.address is None
        assert address.zip is None

    def test_state_is_a_two_letter_code(self):
        with pytest.raises(ValidationError) as exc:
            ShippingAddress(address="1 Main St", city="Springfield", state="Illinois", zip="62701")
        assert "state" in exc.value.messages

    def test_addresses_compare_by_value(self):
        first = ShippingAddress(address="1 Main St", city="Springfield", state="IL", zip="62701")
        second = ShippingAddress(address="1 Main St", city="Springfield", state="IL", zip="62701")
        assert first == second
