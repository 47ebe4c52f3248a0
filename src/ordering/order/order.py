"""Order header and order lines, the immutable result of a checkout.

An order is written once, by checkout, and never modified. Each line carries the
sales price and discount that were current when the order was placed, copied from the
catalogue snapshot; later catalogue price changes never reach an existing order. The
shipping address is likewise a copy of the profile at checkout time.
"""

import datetime
from dataclasses import dataclass, field
from decimal import Decimal

from protean.fields import String
from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, Numeric
from sqlalchemy import String as SqlString
from sqlalchemy.orm import Mapped, mapped_column, relationship

from identity.customer.profile import ShippingSnapshot
from ordering.domain import ordering
from ordering.utils.money import line_total, to_money
from shared.db import Base


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------
class OrderRecord(Base):
    __tablename__ = "orders"

    order_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, index=True)
    date: Mapped[datetime.date] = mapped_column(Date)
    address: Mapped[str | None] = mapped_column(SqlString(200), nullable=True)
    city: Mapped[str | None] = mapped_column(SqlString(50), nullable=True)
    state: Mapped[str | None] = mapped_column(SqlString(2), nullable=True)
    zip: Mapped[str | None] = mapped_column(SqlString(20), nullable=True)
    shipping_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0.00"))

    lines: Mapped[list["OrderLineRecord"]] = relationship(
        back_populates="order",
        order_by="OrderLineRecord.order_line_id",
        cascade="all, delete-orphan",
    )


class OrderLineRecord(Base):
    __tablename__ = "order_line_items"
    __table_args__ = (CheckConstraint("quantity > 0", name="quantity_positive"),)

    order_line_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(Integer, ForeignKey("orders.order_id", ondelete="CASCADE"), index=True)
    product_id: Mapped[int] = mapped_column(Integer)
    sales_price: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    quantity: Mapped[int] = mapped_column(Integer)
    discount: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=Decimal("0.00"))

    order: Mapped[OrderRecord] = relationship(back_populates="lines")


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------
@ordering.value_object
class ShippingAddress:
    """Where the order ships, as captured at checkout."""

    address = String(max_length=200)
    city = String(max_length=50)
    state = String(max_length=2)
    zip = String(max_length=20)

    @classmethod
    def from_snapshot(cls, snapshot: ShippingSnapshot) -> "ShippingAddress":
        return cls(address=snapshot.address, city=snapshot.city, state=snapshot.state, zip=snapshot.zip)


@dataclass(frozen=True)
class OrderLineDraft:
    product_id: int
    sales_price: Decimal
    quantity: int
    discount: Decimal = Decimal("0.00")


@dataclass(frozen=True)
class OrderHeaderDraft:
    user_id: int
    date: datetime.date
    shipping_address: ShippingAddress
    shipping_amount: Decimal = Decimal("0.00")


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class OrderLine:
    order_line_id: int
    order_id: int
    product_id: int
    sales_price: Decimal
    quantity: int
    discount: Decimal = Decimal("0.00")

    @property
    def line_total(self) -> Decimal:
        return line_total(self.sales_price, self.quantity, self.discount)

    @classmethod
    def from_record(cls, record: OrderLineRecord) -> "OrderLine":
        return cls(
            order_line_id=record.order_line_id,
            order_id=record.order_id,
            product_id=record.product_id,
            sales_price=to_money(record.sales_price),
            quantity=record.quantity,
            discount=Decimal(record.discount),
        )


@dataclass(frozen=True)
class OrderHeader:
    order_id: int
    user_id: int
    date: datetime.date
    shipping_address: ShippingAddress
    shipping_amount: Decimal
    lines: tuple[OrderLine, ...] = field(default_factory=tuple)

    @property
    def subtotal(self) -> Decimal:
        return to_money(sum((line.line_total for line in self.lines), Decimal(0)))

    @property
    def total(self) -> Decimal:
        return to_money(self.subtotal + self.shipping_amount)

    def with_lines(self, lines) -> "OrderHeader":
        return OrderHeader(
            order_id=self.order_id,
            user_id=self.user_id,
            date=self.date,
            shipping_address=self.shipping_address,
            shipping_amount=self.shipping_amount,
            lines=tuple(lines),
        )

    @classmethod
    def from_record(cls, record: OrderRecord, include_lines: bool = True) -> "OrderHeader":
        return cls(
            order_id=record.order_id,
            user_id=record.user_id,
            date=record.date,
            shipping_address=ShippingAddress(
                address=record.address,
                city=record.city,
                state=record.state,
                zip=record.zip,
            ),
            shipping_amount=to_money(record.shipping_amount),
            lines=tuple(OrderLine.from_record(line) for line in record.lines) if include_lines else (),
        )
