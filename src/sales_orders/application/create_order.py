"""Application service: Create Order use case.

Validates the whole submission first, then writes the header and every
line item inside one transaction.  If any insert fails the header goes
with it; no partial order is ever visible.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from sales_orders.application.dto import LineItemSpec, OrderDTO, order_to_dto
from sales_orders.domain.model.order import Order, OrderHeader
from sales_orders.domain.repository.order_store import OrderStore
from sales_orders.domain.service.aggregate_calculator import calculate_totals
from sales_orders.domain.service.line_item_validator import LineItemValidator
from sales_orders.utils.logging import get_logger

logger = get_logger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        store: OrderStore,
        validator: LineItemValidator | None = None,
    ) -> None:
        self._store = store
        self._validator = validator or LineItemValidator()

    def handle(
        self,
        order_number: str | None,
        order_date: date | str | None,
        item_specs: Sequence[LineItemSpec] | None,
    ) -> OrderDTO:
        """Create a new order in the Pending state.

        Steps:
        1. Validate line items and header fields (no I/O yet).
        2. Derive item count and final price from the line items.
        3. Insert header, then each line item, in one transaction.
        """
        items = self._validator.validate(item_specs)
        header = OrderHeader.create(order_number, order_date, calculate_totals(items))

        with self._store.transaction() as tx:
            header = tx.insert_order_header(header)
            saved_items = [tx.insert_line_item(header.id, item) for item in items]

        logger.info(
            "Order created",
            order_id=header.id,
            order_number=header.order_number,
            item_count=header.item_count,
            final_price=str(header.final_price),
        )
        return order_to_dto(Order(header=header, items=saved_items))
