"""Shipping charge applied to an order header at checkout."""

from decimal import Decimal
from typing import Protocol

from ordering.cart.cart import Cart
from ordering.order.order import ShippingAddress
from ordering.utils.money import to_money


class ShippingPolicy(Protocol):
    def shipping_for(self, cart: Cart, address: ShippingAddress) -> Decimal: ...


class FlatRateShipping:
    """Same charge for every order, whatever is in it or wherever it goes."""

    def __init__(self, amount: Decimal = Decimal("0.00")):
        if Decimal(amount) < 0:
            raise ValueError("Shipping amount cannot be negative")
        self.amount = to_money(amount)

    def shipping_for(self, cart: Cart, address: ShippingAddress) -> Decimal:
        return self.amount
