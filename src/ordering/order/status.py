"""Order status administration: command and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    """Move an order to any of the known statuses."""

    order_id = Identifier(required=True)
    status = String(max_length=20)


@ordering.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        try:
            order = repo.get(command.order_id)
        except ObjectNotFoundError:
            raise ObjectNotFoundError("Order not found.") from None
        order.update_status(command.status)
        repo.add(order)

        logger.info("Order status updated", order_id=str(order.id), status=order.status)
        return str(order.id)
