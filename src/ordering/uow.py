"""Unit of work: one database transaction and the storage adapters bound to it.

Everything done through ``uow.carts``, ``uow.catalog``, ``uow.profiles`` and
``uow.orders`` inside one ``with UnitOfWork(...)`` block commits together on a clean
exit, or is rolled back together if the block raises (including when the commit
itself fails).

Adapters are built from factories so a test can substitute one of them, e.g. an order
writer that fails half-way, without touching the services.
"""

from collections.abc import Callable

from sqlalchemy.orm import Session

from catalogue.product.reader import CatalogReader, SqlCatalogReader
from identity.customer.profile import ProfileReader, SqlProfileReader
from ordering.cart.cart import CartStore
from ordering.cart.store import SqlCartStore
from ordering.order.repository import OrderWriter, SqlOrderRepository
from shared.db import Database


class UnitOfWork:
    carts: CartStore
    catalog: CatalogReader
    profiles: ProfileReader
    orders: OrderWriter

    def __init__(
        self,
        database: Database,
        carts: Callable[[Session], CartStore] = SqlCartStore,
        catalog: Callable[[Session], CatalogReader] = SqlCatalogReader,
        profiles: Callable[[Session], ProfileReader] = SqlProfileReader,
        orders: Callable[[Session], OrderWriter] = SqlOrderRepository,
    ):
        self._database = database
        self._factories = {"carts": carts, "catalog": catalog, "profiles": profiles, "orders": orders}
        self.session: Session | None = None

    def __enter__(self) -> "UnitOfWork":
        self.session = self._database.session()
        self.session.begin()
        for name, factory in self._factories.items():
            setattr(self, name, factory(self.session))
        return self

    def __exit__(self, exc_type, exc, tb):
        try:
            if exc_type is None:
                self.session.commit()
            else:
                self.session.rollback()
        except BaseException:
            self.session.rollback()
            raise
        finally:
            self.session.close()
            self.session = None
        return False
