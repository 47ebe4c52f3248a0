"""Read side for placed orders, always scoped to the requesting user."""

from collections.abc import Callable

from ordering.order.order import OrderHeader
from ordering.uow import UnitOfWork


class OrderQueries:
    def __init__(self, uow_factory: Callable[[], UnitOfWork]):
        self._uow_factory = uow_factory

    def get(self, user_id: int, order_id: int) -> OrderHeader:
        with self._uow_factory() as uow:
            return uow.orders.get(order_id, user_id)

    def list_for_user(self, user_id: int) -> list[OrderHeader]:
        with self._uow_factory() as uow:
            return uow.orders.list_for_user(user_id)
