"""Domain service: structural validation of submitted line items.

Turns raw caller input into ``OrderLineItem`` value objects.  Every
item is checked before anything is reported so a single
``ValidationError`` names all offending items at once.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from sales_orders.domain.exceptions import ValidationError
from sales_orders.domain.model.order import PRODUCT_ID_MAX_LENGTH, OrderLineItem
from sales_orders.domain.model.value_objects import Money, Quantity


class RawLineItem(Protocol):
    product_id: object
    quantity: object
    unit_price: object
    line_total: object


@dataclass(frozen=True)
class LineItemPolicy:
    """How much to trust caller-supplied line totals.

    ``strict_line_totals``: a missing line total is an error instead of
    being counted as zero.
    ``verify_line_totals``: a line total must equal quantity x unit price.
    """

    strict_line_totals: bool = False
    verify_line_totals: bool = False


class LineItemValidator:

    def __init__(self, policy: LineItemPolicy | None = None) -> None:
        self._policy = policy or LineItemPolicy()

    def validate(self, raw_items: Sequence[RawLineItem] | None) -> list[OrderLineItem]:
        if not raw_items:
            raise ValidationError("Order must contain at least one line item")

        items: list[OrderLineItem] = []
        problems: list[str] = []
        for position, raw in enumerate(raw_items, start=1):
            errors: list[str] = []
            item = self._validate_one(raw, errors)
            if errors:
                problems.append(f"line item {position}: " + "; ".join(errors))
            elif item is not None:
                items.append(item)

        if problems:
            raise ValidationError("Invalid line items: " + " | ".join(problems))
        return items

    # --- Internal helpers -----------------------------------------------------

    def _validate_one(self, raw: RawLineItem, errors: list[str]) -> OrderLineItem | None:
        product_id = _text_or_none(raw.product_id)
        if product_id is None:
            errors.append("product_id is required")
        elif len(product_id) > PRODUCT_ID_MAX_LENGTH:
            errors.append(
                f"product_id cannot be longer than {PRODUCT_ID_MAX_LENGTH} characters"
            )

        quantity = _convert(raw.quantity, "quantity", Quantity.of, errors)
        unit_price = _convert(raw.unit_price, "unit_price", Money.of, errors)

        if _is_missing(raw.line_total) and not self._policy.strict_line_totals:
            line_total: Money | None = Money.zero()
        else:
            line_total = _convert(raw.line_total, "line_total", Money.of, errors)

        if errors:
            return None

        item = OrderLineItem(
            product_id=product_id,  # type: ignore[arg-type]
            quantity=quantity,  # type: ignore[arg-type]
            unit_price=unit_price,  # type: ignore[arg-type]
            line_total=line_total,  # type: ignore[arg-type]
        )
        if self._policy.verify_line_totals and item.line_total.amount != item.expected_total:
            errors.append(
                f"line_total {item.line_total} does not match "
                f"quantity x unit_price = {item.expected_total:.2f}"
            )
            return None
        return item


def _is_missing(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _text_or_none(value: object) -> str | None:
    if _is_missing(value):
        return None
    return str(value).strip()


def _convert(value: object, field: str, factory, errors: list[str]):
    if _is_missing(value):
        errors.append(f"{field} is required")
        return None
    try:
        return factory(value)
    except ValidationError as exc:
        errors.append(f"{field}: {exc}")
        return None
