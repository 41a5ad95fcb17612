"""Application service: Replace Order use case.

A full update: header fields and totals are rewritten and the entire
line-item set is swapped for the submitted one.  Items are never
patched individually.  Status is left alone.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from sales_orders.application.dto import LineItemSpec, OrderDTO, order_to_dto
from sales_orders.domain.exceptions import EntityNotFoundError, OrderLockedError
from sales_orders.domain.model.order import Order, validate_header_fields
from sales_orders.domain.repository.order_store import OrderStore
from sales_orders.domain.service.aggregate_calculator import calculate_totals
from sales_orders.domain.service.line_item_validator import LineItemValidator
from sales_orders.utils.logging import get_logger

logger = get_logger(__name__)


class ReplaceOrderHandler:

    def __init__(
        self,
        store: OrderStore,
        validator: LineItemValidator | None = None,
    ) -> None:
        self._store = store
        self._validator = validator or LineItemValidator()

    def handle(
        self,
        order_id: int,
        order_number: str | None,
        order_date: date | str | None,
        item_specs: Sequence[LineItemSpec] | None,
    ) -> OrderDTO:
        order_number, order_date = validate_header_fields(order_number, order_date)
        items = self._validator.validate(item_specs)
        totals = calculate_totals(items)

        with self._store.transaction() as tx:
            current = tx.get_order_header(order_id)
            if current is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")
            if current.is_locked:
                logger.warning(
                    "Replace rejected on locked order",
                    order_id=order_id,
                    status=current.status.value,
                )
                raise OrderLockedError(
                    f"Order #{order_id} is {current.status.value} and cannot be modified"
                )

            header = current.revise(order_number, order_date, totals)
            tx.update_order_header(header)
            removed = tx.delete_line_items_for_order(order_id)
            saved_items = [tx.insert_line_item(order_id, item) for item in items]

        logger.info(
            "Order replaced",
            order_id=order_id,
            removed_items=removed,
            item_count=header.item_count,
            final_price=str(header.final_price),
        )
        return order_to_dto(Order(header=header, items=saved_items))
