"""Application service: Delete Order use case."""

from __future__ import annotations

from sales_orders.domain.exceptions import EntityNotFoundError, OrderLockedError
from sales_orders.domain.repository.order_store import OrderStore
from sales_orders.utils.logging import get_logger

logger = get_logger(__name__)


class DeleteOrderHandler:

    def __init__(self, store: OrderStore) -> None:
        self._store = store

    def handle(self, order_id: int) -> None:
        """Remove an order and all of its line items.

        Completed orders are locked and cannot be deleted.
        """
        with self._store.transaction() as tx:
            header = tx.get_order_header(order_id)
            if header is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")
            if header.is_locked:
                logger.warning(
                    "Delete rejected on locked order",
                    order_id=order_id,
                    status=header.status.value,
                )
                raise OrderLockedError(
                    f"Order #{order_id} is {header.status.value} and cannot be deleted"
                )

            removed = tx.delete_line_items_for_order(order_id)
            tx.delete_order_header(order_id)

        logger.info("Order deleted", order_id=order_id, removed_items=removed)
