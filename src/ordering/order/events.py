"""Domain events for the Order aggregate.

Nothing in this service subscribes to them. The confirmation email goes
through the notification dispatcher directly; the events are the published
record for event handlers or projections added later.
"""

from protean.fields import DateTime, Float, Identifier, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A customer placed a new order."""

    __version__ = 1

    order_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    customer_email = String(max_length=254)
    tracking_id = String(required=True, max_length=40)
    items = Text(required=True)  # JSON: list of {name, quantity, price}
    total_price = Float(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """An administrator moved the order to a new status."""

    __version__ = 1

    order_id = Identifier(required=True)
    tracking_id = String(required=True, max_length=40)
    previous_status = String(required=True, max_length=20)
    new_status = String(required=True, max_length=20)
    changed_at = DateTime(required=True)
