"""Pydantic response schemas for the Catalogue API."""

from decimal import Decimal

from pydantic import BaseModel

from catalogue.product.product import ProductSnapshot


class ProductResponse(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": 7,
                    "name": "Smartphone",
                    "price": "19.99",
                    "discount_percent": "0.00",
                    "category_id": 1,
                    "description": "A powerful and feature-rich smartphone.",
                    "subcategory": "Black",
                    "stock": 50,
                    "featured": False,
                    "image_url": "smartphone.jpg",
                }
            ]
        }
    }

    product_id: int
    name: str
    price: Decimal
    discount_percent: Decimal
    category_id: int | None = None
    description: str | None = None
    subcategory: str | None = None
    stock: int
    featured: bool
    image_url: str | None = None

    @classmethod
    def from_snapshot(cls, snapshot: ProductSnapshot) -> "ProductResponse":
        return cls(
            product_id=snapshot.product_id,
            name=snapshot.name,
            price=snapshot.price,
            discount_percent=snapshot.discount_percent,
            category_id=snapshot.category_id,
            description=snapshot.description,
            subcategory=snapshot.subcategory,
            stock=snapshot.stock,
            featured=snapshot.featured,
            image_url=snapshot.image_url,
        )
