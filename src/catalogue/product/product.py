"""Product aggregate: an item the store sells, with price and stock on hand."""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Float, Integer, String, Text

from catalogue.domain import catalogue


class ProductStatus(Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


@catalogue.aggregate
class Product:
    name = String(required=True, max_length=255)
    sku = String(required=True, max_length=50, unique=True)
    price = Float(required=True, min_value=0.0)
    stock = Integer(default=0, min_value=0)
    status = String(choices=ProductStatus, default=ProductStatus.ACTIVE.value)
    description = Text()
    category = String(max_length=100)
    created_at = DateTime()

    @classmethod
    def create(cls, name, sku, price, stock=0, description=None, category=None):
        return cls(
            name=name,
            sku=sku,
            price=price,
            stock=stock,
            description=description,
            category=category,
            created_at=datetime.now(UTC),
        )

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "sku": self.sku,
            "price": self.price,
            "stock": self.stock,
            "status": self.status,
            "description": self.description,
            "category": self.category,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
