"""SQL storage for orders.

Orders are append-only: checkout inserts a header, then its lines, inside the same
transaction. Reads are scoped to the owning user; somebody else's order looks exactly
like a missing one.
"""

from typing import Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from ordering.order.order import (
    OrderHeader,
    OrderHeaderDraft,
    OrderLine,
    OrderLineDraft,
    OrderLineRecord,
    OrderRecord,
)
from shared.errors import NotFoundError


class OrderWriter(Protocol):
    def insert_header(self, draft: OrderHeaderDraft) -> OrderHeader: ...

    def insert_line(self, order_id: int, draft: OrderLineDraft) -> OrderLine: ...

    def get(self, order_id: int, user_id: int) -> OrderHeader: ...

    def list_for_user(self, user_id: int) -> list[OrderHeader]: ...


class SqlOrderRepository:
    def __init__(self, session: Session):
        self._session = session

    def insert_header(self, draft: OrderHeaderDraft) -> OrderHeader:
        address = draft.shipping_address
        record = OrderRecord(
            user_id=draft.user_id,
            date=draft.date,
            address=address.address,
            city=address.city,
            state=address.state,
            zip=address.zip,
            shipping_amount=draft.shipping_amount,
        )
        self._session.add(record)
        self._session.flush()
        return OrderHeader.from_record(record, include_lines=False)

    def insert_line(self, order_id: int, draft: OrderLineDraft) -> OrderLine:
        record = OrderLineRecord(
            order_id=order_id,
            product_id=draft.product_id,
            sales_price=draft.sales_price,
            quantity=draft.quantity,
            discount=draft.discount,
        )
        self._session.add(record)
        self._session.flush()
        return OrderLine.from_record(record)

    def get(self, order_id: int, user_id: int) -> OrderHeader:
        record = self._session.scalars(
            select(OrderRecord)
            .where(OrderRecord.order_id == order_id, OrderRecord.user_id == user_id)
            .options(selectinload(OrderRecord.lines))
        ).one_or_none()
        if record is None:
            raise NotFoundError({"order_id": [f"Order {order_id} does not exist"]})
        return OrderHeader.from_record(record)

    def list_for_user(self, user_id: int) -> list[OrderHeader]:
        records = self._session.scalars(
            select(OrderRecord)
            .where(OrderRecord.user_id == user_id)
            .order_by(OrderRecord.order_id)
            .options(selectinload(OrderRecord.lines))
        ).all()
        return [OrderHeader.from_record(record) for record in records]
