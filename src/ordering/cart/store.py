"""SQL storage for cart lines.

Every mutation is a single statement so that concurrent requests for the same user
cannot lose an update: increments and overwrites are native ``ON CONFLICT`` upserts
keyed by ``(user_id, product_id)``. The store trusts product ids it is given; checking
that a product exists is the caller's job.
"""

from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from ordering.cart.cart import MAX_QUANTITY, Cart, CartLine, CartLineRecord
from shared.errors import InvalidArgumentError

_ON_CONFLICT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def validate_quantity(quantity) -> int:
    """Reject anything that is not an integer between 0 and ``MAX_QUANTITY``. No clamping."""
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidArgumentError({"quantity": ["Quantity must be an integer"]})
    if quantity < 0:
        raise InvalidArgumentError({"quantity": ["Quantity must be >= 0"]})
    if quantity > MAX_QUANTITY:
        raise InvalidArgumentError({"quantity": [f"Quantity must be <= {MAX_QUANTITY}"]})
    return quantity


class SqlCartStore:
    def __init__(self, session: Session):
        self._session = session

    def get(self, user_id: int, for_update: bool = False) -> Cart:
        """Return the user's cart; an empty cart if there are no lines.

        ``for_update`` locks the returned rows until the surrounding transaction ends.
        """
        stmt = (
            select(CartLineRecord)
            .where(CartLineRecord.user_id == user_id)
            .order_by(CartLineRecord.product_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()

        records = self._session.scalars(stmt).all()
        return Cart(user_id=user_id, lines=tuple(CartLine.from_record(record) for record in records))

    def add_one(self, user_id: int, product_id: int) -> None:
        """Increment the product's line by one, inserting it with quantity 1 if absent.

        A line already at ``MAX_QUANTITY`` is left as is and the add is rejected.
        """
        result = self._upsert(user_id, product_id, 1, increment=True)
        if result.rowcount == 0:
            raise InvalidArgumentError({"quantity": [f"Quantity must be <= {MAX_QUANTITY}"]})

    def set_quantity(self, user_id: int, product_id: int, quantity: int) -> None:
        """Overwrite the line's quantity. Zero removes the line (absent is fine)."""
        validate_quantity(quantity)

        if quantity == 0:
            self._session.execute(
                delete(CartLineRecord).where(
                    CartLineRecord.user_id == user_id,
                    CartLineRecord.product_id == product_id,
                )
            )
            return

        self._upsert(user_id, product_id, quantity, increment=False)

    def clear(self, user_id: int, product_ids: list[int] | None = None) -> None:
        """Delete the user's lines; only ``product_ids`` when given."""
        stmt = delete(CartLineRecord).where(CartLineRecord.user_id == user_id)
        if product_ids is not None:
            if not product_ids:
                return
            stmt = stmt.where(CartLineRecord.product_id.in_(product_ids))
        self._session.execute(stmt)

    def _upsert(self, user_id: int, product_id: int, quantity: int, increment: bool):
        table = CartLineRecord.__table__
        insert = _ON_CONFLICT_INSERTS[self._session.get_bind().dialect.name]

        stmt = insert(table).values(user_id=user_id, product_id=product_id, quantity=quantity)
        if increment:
            stmt = stmt.on_conflict_do_update(
                index_elements=["user_id", "product_id"],
                set_={"quantity": table.c.quantity + quantity},
                where=table.c.quantity <= MAX_QUANTITY - quantity,
            )
        else:
            stmt = stmt.on_conflict_do_update(
                index_elements=["user_id", "product_id"],
                set_={"quantity": stmt.excluded.quantity},
            )
        return self._session.execute(stmt)
