"""Application service: Show Order use case (query)."""

from __future__ import annotations

from sales_orders.application.dto import OrderDTO, order_to_dto
from sales_orders.domain.exceptions import EntityNotFoundError
from sales_orders.domain.model.order import Order
from sales_orders.domain.repository.order_store import OrderStore


class ShowOrderHandler:

    def __init__(self, store: OrderStore) -> None:
        self._store = store

    def handle(self, order_id: int) -> OrderDTO:
        # Header and items are read in one transaction so they agree.
        with self._store.transaction() as tx:
            header = tx.get_order_header(order_id)
            if header is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")
            items = tx.get_line_items_for_order(order_id)
        return order_to_dto(Order(header=header, items=items))
