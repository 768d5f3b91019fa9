"""Public order tracking by tracking ID and billing email."""

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from ordering.order.order import Order

logger = structlog.get_logger(__name__)


def track_order(tracking_id, email) -> dict:
    """Return the public summary of an order.

    A stored email must match the supplied one; a mismatch is reported exactly
    like a missing order. Legacy orders without a stored email are tracked by
    ID alone.
    """
    tracking_id = str(tracking_id or "").strip()
    email = str(email or "").strip().lower()

    if not tracking_id or not email:
        raise ValidationError({"tracking": ["Tracking ID and billing email are required."]})

    order = current_domain.repository_for(Order).find_by_tracking_id(tracking_id)
    if order is None:
        raise ObjectNotFoundError("Order not found.")

    if order.customer_email and order.customer_email != email:
        logger.info("Tracking email mismatch", tracking_id=tracking_id)
        raise ObjectNotFoundError("Order not found or email does not match the record.")

    return order.tracking_summary()
