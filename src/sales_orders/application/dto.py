"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from sales_orders.domain.model.order import Order, OrderHeader, OrderLineItem


@dataclass(frozen=True)
class LineItemSpec:
    """Input: one line item as submitted by the caller, not yet validated."""

    product_id: object
    quantity: object
    unit_price: object
    line_total: object = None


@dataclass(frozen=True)
class OrderLineItemDTO:
    id: int
    product_id: str
    quantity: int
    unit_price: str  # formatted, e.g. "10.00"
    line_total: str


@dataclass(frozen=True)
class OrderSummaryDTO:
    """Output: an order header without its line items."""

    id: int
    order_number: str
    order_date: str
    item_count: int
    final_price: str
    status: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    order_number: str
    order_date: str
    item_count: int
    final_price: str
    status: str
    items: list[OrderLineItemDTO]


# --- Mapping ------------------------------------------------------------------


def summary_to_dto(header: OrderHeader) -> OrderSummaryDTO:
    return OrderSummaryDTO(
        id=header.id,  # type: ignore[arg-type]
        order_number=header.order_number,
        order_date=header.order_date.isoformat(),
        item_count=header.item_count,
        final_price=str(header.final_price),
        status=header.status.value,
    )


def order_to_dto(order: Order) -> OrderDTO:
    header = order.header
    return OrderDTO(
        id=header.id,  # type: ignore[arg-type]
        order_number=header.order_number,
        order_date=header.order_date.isoformat(),
        item_count=header.item_count,
        final_price=str(header.final_price),
        status=header.status.value,
        items=[_line_item_to_dto(item) for item in order.items],
    )


def _line_item_to_dto(item: OrderLineItem) -> OrderLineItemDTO:
    return OrderLineItemDTO(
        id=item.id,  # type: ignore[arg-type]
        product_id=item.product_id,
        quantity=item.quantity.value,
        unit_price=str(item.unit_price),
        line_total=str(item.line_total),
    )
