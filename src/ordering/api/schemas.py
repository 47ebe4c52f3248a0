"""Pydantic request/response schemas for the Ordering API.

These are the external contracts, kept separate from the internal cart and order types.
"""

import datetime
from decimal import Decimal

from pydantic import BaseModel

from catalogue.api.schemas import ProductResponse
from ordering.cart.items import PricedCart
from ordering.order.order import OrderHeader, OrderLine


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class UpdateCartQuantityRequest(BaseModel):
    # Not bounded here: a negative quantity is a 400 from the cart, not a schema error
    quantity: int

    model_config = {"json_schema_extra": {"examples": [{"quantity": 3}]}}


class CartItemResponse(BaseModel):
    product: ProductResponse
    quantity: int
    discount_percent: Decimal
    line_total: Decimal


class CartResponse(BaseModel):
    user_id: int
    items: dict[str, CartItemResponse]
    item_count: int
    total: Decimal

    @classmethod
    def from_cart(cls, cart: PricedCart) -> "CartResponse":
        return cls(
            user_id=cart.user_id,
            items={
                str(line.product.product_id): CartItemResponse(
                    product=ProductResponse.from_snapshot(line.product),
                    quantity=line.quantity,
                    discount_percent=line.discount_percent,
                    line_total=line.line_total,
                )
                for line in cart.lines
            },
            item_count=cart.item_count,
            total=cart.total,
        )


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OrderLineResponse(BaseModel):
    order_line_id: int
    product_id: int
    sales_price: Decimal
    quantity: int
    discount: Decimal
    line_total: Decimal

    @classmethod
    def from_line(cls, line: OrderLine) -> "OrderLineResponse":
        return cls(
            order_line_id=line.order_line_id,
            product_id=line.product_id,
            sales_price=line.sales_price,
            quantity=line.quantity,
            discount=line.discount,
            line_total=line.line_total,
        )


class OrderResponse(BaseModel):
    order_id: int
    user_id: int
    date: datetime.date
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    shipping_amount: Decimal
    subtotal: Decimal
    total: Decimal
    lines: list[OrderLineResponse]

    @classmethod
    def from_order(cls, order: OrderHeader) -> "OrderResponse":
        address = order.shipping_address
        return cls(
            order_id=order.order_id,
            user_id=order.user_id,
            date=order.date,
            address=address.address,
            city=address.city,
            state=address.state,
            zip=address.zip,
            shipping_amount=order.shipping_amount,
            subtotal=order.subtotal,
            total=order.total,
            lines=[OrderLineResponse.from_line(line) for line in order.lines],
        )
