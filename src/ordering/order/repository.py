"""Repository for the Order aggregate."""

from datetime import UTC, datetime

from ordering.domain import ordering
from ordering.order.order import Order

_EPOCH = datetime.min.replace(tzinfo=UTC)


def _newest_first(orders: list[Order]) -> list[Order]:
    return sorted(orders, key=lambda order: order.created_at or _EPOCH, reverse=True)


@ordering.repository(part_of=Order)
class OrderRepository:
    """Standard CRUD plus the lookups the order workflow needs."""

    def find_by_tracking_id(self, tracking_id: str) -> Order | None:
        results = self._dao.query.filter(tracking_id=tracking_id).all().items
        return results[0] if results else None

    def find_for_owner(self, owner_id: str) -> list[Order]:
        return _newest_first(self._dao.query.filter(owner_id=str(owner_id)).all().items)

    def find_all(self) -> list[Order]:
        return _newest_first(self._dao.query.all().items)

    def delete_order(self, order: Order) -> None:
        self._dao.delete(order)
