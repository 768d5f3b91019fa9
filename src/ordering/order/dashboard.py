"""Admin dashboard summary computed from stored orders."""

from protean.utils.globals import current_domain

from ordering.order.order import Order, OrderStatus

RECENT_ORDERS_LIMIT = 5


def dashboard_summary(total_customers: int) -> dict:
    """Revenue from delivered orders, open order count and the latest orders.

    ``total_customers`` comes from the identity context.
    """
    orders = current_domain.repository_for(Order).find_all()

    total_revenue = sum(o.total_price for o in orders if o.status == OrderStatus.DELIVERED.value)
    new_orders_count = sum(1 for o in orders if o.status == OrderStatus.PROCESSING.value)

    return {
        "total_revenue": total_revenue,
        "new_orders_count": new_orders_count,
        "total_customers": total_customers,
        "recent_orders": [o.to_dict() for o in orders[:RECENT_ORDERS_LIMIT]],
    }
