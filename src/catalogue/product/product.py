"""Product records and the read-only snapshot handed to other contexts.

Other contexts never hold on to a ``ProductRecord``: they receive a frozen
``ProductSnapshot`` copied at lookup time, so a later price change in the catalogue is
not observed by anything that already read the snapshot.
"""

from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import Boolean, CheckConstraint, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from shared.db import Base


class ProductRecord(Base):
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("price >= 0", name="price_not_negative"),
        CheckConstraint("discount_percent >= 0 AND discount_percent <= 100", name="discount_percent_range"),
    )

    product_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200))
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    discount_percent: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=Decimal("0.00"))
    category_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    subcategory: Mapped[str | None] = mapped_column(String(100), nullable=True)
    stock: Mapped[int] = mapped_column(Integer, default=0)
    featured: Mapped[bool] = mapped_column(Boolean, default=False)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)


@dataclass(frozen=True)
class ProductSnapshot:
    """Price, discount and stock of a product at the moment it was read."""

    product_id: int
    name: str
    price: Decimal
    discount_percent: Decimal = Decimal("0.00")
    stock: int = 0
    category_id: int | None = None
    description: str | None = None
    subcategory: str | None = None
    featured: bool = False
    image_url: str | None = None

    @classmethod
    def from_record(cls, record: ProductRecord) -> "ProductSnapshot":
        return cls(
            product_id=record.product_id,
            name=record.name,
            price=Decimal(record.price),
            discount_percent=Decimal(record.discount_percent),
            stock=record.stock or 0,
            category_id=record.category_id,
            description=record.description,
            subcategory=record.subcategory,
            featured=bool(record.featured),
            image_url=record.image_url,
        )
