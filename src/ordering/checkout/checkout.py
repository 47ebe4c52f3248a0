"""Checkout: turn a user's cart into an order in one all-or-nothing transaction.

Preconditions are checked in order and the first failure wins: an empty cart is an
``InvalidStateError``, a missing shipping profile a ``NotFoundError``. Once past them, the
header, every line and the cart clear are written in a single unit of work. Any storage
failure rolls all of it back and surfaces as one ``TransactionFailedError``; the cart is
left as it was and no order row is visible.

The user's cart rows are read with a write lock, so an add that races the checkout either
lands before the read (and is ordered) or waits until commit (and stays in the cart).
Only the products that were ordered are removed from the cart.

Checkout is never retried here. There is no idempotency key, so a caller that retries
after a timeout may place a second order if the first one committed.
"""

import datetime
from collections.abc import Callable

import structlog
from sqlalchemy.exc import SQLAlchemyError

from ordering.checkout.shipping import FlatRateShipping, ShippingPolicy
from ordering.order.order import OrderHeader, OrderHeaderDraft, OrderLineDraft, ShippingAddress
from ordering.uow import UnitOfWork
from shared.errors import InvalidStateError, StorefrontError, TransactionFailedError

logger = structlog.get_logger(__name__)


def utc_today() -> datetime.date:
    return datetime.datetime.now(datetime.UTC).date()


class CheckoutService:
    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        shipping: ShippingPolicy | None = None,
        today: Callable[[], datetime.date] = utc_today,
    ):
        self._uow_factory = uow_factory
        self._shipping = shipping or FlatRateShipping()
        self._today = today

    def checkout(self, user_id: int) -> OrderHeader:
        try:
            with self._uow_factory() as uow:
                order = self._place_order(uow, user_id)
        except StorefrontError as exc:
            logger.info("checkout.rejected", user_id=user_id, kind=exc.kind.value, messages=exc.messages)
            raise
        except SQLAlchemyError as exc:
            logger.error("checkout.failed", user_id=user_id, error=str(exc), error_type=type(exc).__name__)
            raise TransactionFailedError({"_entity": ["Checkout failed, nothing was saved"]}) from exc

        logger.info(
            "checkout.completed",
            user_id=user_id,
            order_id=order.order_id,
            line_count=len(order.lines),
            total=str(order.total),
        )
        return order

    def _place_order(self, uow: UnitOfWork, user_id: int) -> OrderHeader:
        cart = uow.carts.get(user_id, for_update=True)
        if cart.is_empty:
            raise InvalidStateError({"cart": ["Cart is empty"]})

        address = ShippingAddress.from_snapshot(uow.profiles.get(user_id))

        # Prices are read once, here, and frozen into the lines
        drafts = []
        for line in cart.lines:
            product = uow.catalog.get(line.product_id)
            drafts.append(
                OrderLineDraft(
                    product_id=line.product_id,
                    sales_price=product.price,
                    quantity=line.quantity,
                    discount=product.discount_percent,
                )
            )

        header = uow.orders.insert_header(
            OrderHeaderDraft(
                user_id=user_id,
                date=self._today(),
                shipping_address=address,
                shipping_amount=self._shipping.shipping_for(cart, address),
            )
        )
        lines = [uow.orders.insert_line(header.order_id, draft) for draft in drafts]

        uow.carts.clear(user_id, product_ids=cart.product_ids)
        return header.with_lines(lines)
