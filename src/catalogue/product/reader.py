"""Catalogue lookups consumed by the cart and checkout."""

from typing import Protocol

from sqlalchemy.orm import Session

from catalogue.product.product import ProductRecord, ProductSnapshot
from shared.errors import NotFoundError


class CatalogReader(Protocol):
    def get(self, product_id: int) -> ProductSnapshot: ...


class SqlCatalogReader:
    def __init__(self, session: Session):
        self._session = session

    def get(self, product_id: int) -> ProductSnapshot:
        """Return a snapshot of the product, or raise ``NotFoundError``."""
        record = self._session.get(ProductRecord, product_id)
        if record is None:
            raise NotFoundError({"product_id": [f"Product {product_id} does not exist"]})
        return ProductSnapshot.from_record(record)
