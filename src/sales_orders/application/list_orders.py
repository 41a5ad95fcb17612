"""Application service: List Orders use case (query)."""

from __future__ import annotations

from sales_orders.application.dto import OrderSummaryDTO, summary_to_dto
from sales_orders.domain.repository.order_store import OrderStore


class ListOrdersHandler:

    def __init__(self, store: OrderStore) -> None:
        self._store = store

    def handle(self) -> list[OrderSummaryDTO]:
        """Return every order header, newest first."""
        with self._store.transaction() as tx:
            headers = tx.list_order_headers()
        return [summary_to_dto(header) for header in headers]
