"""Application service: Change Order Status use case.

Unlike replace and delete, a status change is allowed from every
state, including Completed.  This is how an erroneous completion is
corrected.
"""

from __future__ import annotations

from sales_orders.domain.exceptions import EntityNotFoundError
from sales_orders.domain.model.status import OrderStatus
from sales_orders.domain.repository.order_store import OrderStore
from sales_orders.utils.logging import get_logger

logger = get_logger(__name__)


class ChangeOrderStatusHandler:

    def __init__(self, store: OrderStore) -> None:
        self._store = store

    def handle(self, order_id: int, new_status: str | OrderStatus) -> OrderStatus:
        target = OrderStatus.parse(new_status)

        with self._store.transaction() as tx:
            header = tx.get_order_header(order_id)
            if header is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")
            previous = header.status
            tx.update_order_status(order_id, target)

        logger.info(
            "Order status changed",
            order_id=order_id,
            previous=previous.value,
            status=target.value,
        )
        return target
