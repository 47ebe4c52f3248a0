"""Shopping cart: the mutable, per-user set of lines that checkout converts to an order.

A cart has no identity of its own: it is addressed by user id, exists (empty) from the
first time it is read, and is emptied, never deleted, after checkout or an explicit
clear. It holds at most one line per product and every stored line has a positive
quantity; setting a quantity to zero removes the line.

Lines carry no price or discount. Both are read from the catalogue whenever the cart
is shown or checked out, so the cart view and the order agree.
"""

from dataclasses import dataclass, field
from typing import Protocol

from protean.fields import Integer
from sqlalchemy import CheckConstraint, ForeignKey
from sqlalchemy import Integer as SqlInteger
from sqlalchemy.orm import Mapped, mapped_column

from ordering.domain import ordering
from shared.db import Base
from shared.errors import InvalidArgumentError

# Largest quantity the INTEGER column holds on every supported backend
MAX_QUANTITY = 2**31 - 1


class CartLineRecord(Base):
    __tablename__ = "shopping_cart"
    __table_args__ = (CheckConstraint("quantity > 0", name="quantity_positive"),)

    user_id: Mapped[int] = mapped_column(SqlInteger, primary_key=True)
    product_id: Mapped[int] = mapped_column(SqlInteger, ForeignKey("products.product_id"), primary_key=True)
    quantity: Mapped[int] = mapped_column(SqlInteger)


@ordering.value_object
class CartLine:
    product_id = Integer(required=True)
    quantity = Integer(required=True, min_value=1, max_value=MAX_QUANTITY)

    @classmethod
    def from_record(cls, record: CartLineRecord) -> "CartLine":
        return cls(product_id=record.product_id, quantity=record.quantity)


@dataclass(frozen=True)
class Cart:
    """Read-only snapshot of a user's cart, lines in product-id order."""

    user_id: int
    lines: tuple[CartLine, ...] = field(default_factory=tuple)

    def __post_init__(self):
        product_ids = [line.product_id for line in self.lines]
        if len(set(product_ids)) != len(product_ids):
            raise InvalidArgumentError({"lines": ["A cart holds at most one line per product"]})
        object.__setattr__(self, "lines", tuple(sorted(self.lines, key=lambda line: line.product_id)))

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def product_ids(self) -> list[int]:
        return [line.product_id for line in self.lines]

    @property
    def items(self) -> dict[int, CartLine]:
        return {line.product_id: line for line in self.lines}

    def quantity_of(self, product_id: int) -> int:
        line = self.items.get(product_id)
        return line.quantity if line else 0

    def __len__(self) -> int:
        return len(self.lines)


class CartStore(Protocol):
    def get(self, user_id: int, for_update: bool = False) -> Cart: ...

    def add_one(self, user_id: int, product_id: int) -> None: ...

    def set_quantity(self, user_id: int, product_id: int, quantity: int) -> None: ...

    def clear(self, user_id: int, product_ids: list[int] | None = None) -> None: ...
