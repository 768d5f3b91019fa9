"""Order aggregate: the record behind placement, tracking and administration.

Only ``status`` changes after creation. There is no transition graph: an
administrator may move an order from any status to any other.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from ordering.domain import ordering
from ordering.order.events import OrderPlaced, OrderStatusChanged


class OrderStatus(Enum):
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


ORDER_STATUSES = [status.value for status in OrderStatus]


@ordering.entity(part_of="Order")
class OrderItem:
    """A line item captured at order time: what was bought, how many, and the unit price."""

    name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)

    def to_dict(self) -> dict:
        return {"name": self.name, "quantity": self.quantity, "price": self.price}


@ordering.aggregate
class Order:
    owner_id = Identifier(required=True)
    customer_email = String(max_length=254)
    items = HasMany(OrderItem)
    total_price = Float(required=True, min_value=0.0)
    tracking_id = String(required=True, max_length=40, unique=True)
    status = String(choices=OrderStatus, default=OrderStatus.PROCESSING.value)
    shipping_address = Text()
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, owner_id, customer_email, items_data, tracking_id, shipping_address=None):
        """Create an order in ``Processing`` from validated item dicts.

        The total is always recomputed from the items.
        """
        if not items_data:
            raise ValidationError({"items": ["Items array is required and cannot be empty."]})

        now = datetime.now(UTC)
        items = [
            OrderItem(name=item["name"], quantity=item["quantity"], price=item["price"]) for item in items_data
        ]
        total_price = sum(item.price * item.quantity for item in items)

        order = cls(
            owner_id=owner_id,
            customer_email=customer_email,
            items=items,
            total_price=total_price,
            tracking_id=tracking_id,
            status=OrderStatus.PROCESSING.value,
            shipping_address=shipping_address,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                owner_id=str(owner_id),
                customer_email=customer_email,
                tracking_id=tracking_id,
                items=json.dumps([item.to_dict() for item in items]),
                total_price=total_price,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Administration
    # -------------------------------------------------------------------
    def update_status(self, new_status):
        if not new_status:
            raise ValidationError({"status": ["Status is required."]})
        if new_status not in ORDER_STATUSES:
            raise ValidationError({"status": [f"Status must be one of: {', '.join(ORDER_STATUSES)}."]})

        previous_status = self.status
        now = datetime.now(UTC)
        self.status = new_status
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                tracking_id=self.tracking_id,
                previous_status=previous_status,
                new_status=new_status,
                changed_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------
    def item_dicts(self) -> list[dict]:
        return [item.to_dict() for item in self.items]

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "owner_id": str(self.owner_id),
            "customer_email": self.customer_email,
            "items": self.item_dicts(),
            "total_price": self.total_price,
            "tracking_id": self.tracking_id,
            "status": self.status,
            "shipping_address": self.shipping_address,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def tracking_summary(self) -> dict:
        """The public projection: no owner and no address."""
        return {
            "tracking_id": self.tracking_id,
            "status": self.status,
            "items": self.item_dicts(),
            "total_price": self.total_price,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "customer_email": self.customer_email,
        }
