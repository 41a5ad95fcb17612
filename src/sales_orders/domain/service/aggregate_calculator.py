"""Domain service: derive header totals from line items."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sales_orders.domain.exceptions import ValidationError
from sales_orders.domain.model.value_objects import Money

if TYPE_CHECKING:
    from sales_orders.domain.model.order import OrderLineItem


@dataclass(frozen=True)
class OrderTotals:
    item_count: int
    final_price: Money


def calculate_totals(items: Sequence[OrderLineItem]) -> OrderTotals:
    """Count the items and sum their caller-supplied line totals."""
    final_price = Money.zero()
    for item in items:
        try:
            final_price = final_price + item.line_total
        except ValidationError as exc:
            raise ValidationError(f"Order total is too large: {exc}") from exc
    return OrderTotals(item_count=len(items), final_price=final_price)
