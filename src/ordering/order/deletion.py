"""Order deletion: an administrator removes an order for good."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class DeleteOrder:
    order_id = Identifier(required=True)


@ordering.command_handler(part_of=Order)
class DeleteOrderHandler:
    @handle(DeleteOrder)
    def delete_order(self, command):
        repo = current_domain.repository_for(Order)
        try:
            order = repo.get(command.order_id)
        except ObjectNotFoundError:
            raise ObjectNotFoundError("Order not found.") from None
        repo.delete_order(order)

        logger.info("Order deleted", order_id=str(command.order_id), tracking_id=order.tracking_id)
        return str(command.order_id)
