"""Read-side lookups over stored orders."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.order.order import Order


def owner_orders(owner_id) -> list[Order]:
    """Orders placed by ``owner_id``, newest first."""
    return current_domain.repository_for(Order).find_for_owner(owner_id)


def all_orders() -> list[Order]:
    """Every order, newest first. Admin only."""
    return current_domain.repository_for(Order).find_all()


def get_order(order_id) -> Order:
    return current_domain.repository_for(Order).get(order_id)


def owner_order(order_id, owner_id) -> Order:
    """One order, but only if ``owner_id`` placed it.

    Someone else's order is reported as missing rather than forbidden.
    """
    try:
        order = current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise ObjectNotFoundError("Order not found") from None

    if str(order.owner_id) != str(owner_id):
        raise ObjectNotFoundError("Order not found")
    return order
