"""FastAPI endpoints for the Catalogue domain (read-only)."""

from fastapi import APIRouter, Depends

from catalogue.api.schemas import ProductResponse
from catalogue.product.reader import SqlCatalogReader
from shared.api import get_database
from shared.db import Database

product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: int, database: Database = Depends(get_database)) -> ProductResponse:
    with database.session() as session:
        snapshot = SqlCatalogReader(session).get(product_id)
    return ProductResponse.from_snapshot(snapshot)
