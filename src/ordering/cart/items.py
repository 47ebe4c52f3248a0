"""Cart item management: the layer between HTTP and ``CartStore``.

``CartStore`` trusts the product ids it is given, so every path that can create a line
checks the catalogue first. Each call runs in its own unit of work.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import Decimal

import structlog

from catalogue.product.product import ProductSnapshot
from ordering.cart.cart import Cart
from ordering.cart.store import validate_quantity
from ordering.uow import UnitOfWork
from ordering.utils.money import line_total, to_money
from shared.errors import NotFoundError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PricedLine:
    product: ProductSnapshot
    quantity: int

    @property
    def discount_percent(self) -> Decimal:
        return self.product.discount_percent

    @property
    def line_total(self) -> Decimal:
        return line_total(self.product.price, self.quantity, self.product.discount_percent)


@dataclass(frozen=True)
class PricedCart:
    """A cart joined with current catalogue prices, for display."""

    user_id: int
    lines: tuple[PricedLine, ...] = field(default_factory=tuple)

    @property
    def total(self) -> Decimal:
        return to_money(sum((line.line_total for line in self.lines), Decimal(0)))

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)


class CartItemsService:
    def __init__(self, uow_factory: Callable[[], UnitOfWork]):
        self._uow_factory = uow_factory

    def view(self, user_id: int) -> PricedCart:
        with self._uow_factory() as uow:
            return self._price(uow, uow.carts.get(user_id))

    def add_product(self, user_id: int, product_id: int) -> PricedCart:
        with self._uow_factory() as uow:
            uow.catalog.get(product_id)
            uow.carts.add_one(user_id, product_id)
            cart = uow.carts.get(user_id)
            priced = self._price(uow, cart)

        logger.info(
            "cart.item_added",
            user_id=user_id,
            product_id=product_id,
            quantity=cart.quantity_of(product_id),
        )
        return priced

    def set_quantity(self, user_id: int, product_id: int, quantity) -> None:
        validate_quantity(quantity)

        with self._uow_factory() as uow:
            if quantity > 0:
                uow.catalog.get(product_id)
            uow.carts.set_quantity(user_id, product_id, quantity)

        logger.info("cart.quantity_set", user_id=user_id, product_id=product_id, quantity=quantity)

    def clear(self, user_id: int) -> PricedCart:
        with self._uow_factory() as uow:
            uow.carts.clear(user_id)

        logger.info("cart.cleared", user_id=user_id)
        return PricedCart(user_id=user_id)

    def _price(self, uow: UnitOfWork, cart: Cart) -> PricedCart:
        lines = []
        for line in cart.lines:
            try:
                product = uow.catalog.get(line.product_id)
            except NotFoundError:
                # Line stays stored; it just cannot be shown without a product
                logger.warning("cart.product_missing", user_id=cart.user_id, product_id=line.product_id)
                continue
            lines.append(PricedLine(product=product, quantity=line.quantity))
        return PricedCart(user_id=cart.user_id, lines=tuple(lines))
