"""Order aggregate: a header plus the line items it exclusively owns.

The header's ``item_count`` and ``final_price`` are derived from the
line items and are never set independently: the only ways to build a
header with totals are ``OrderHeader.create`` and ``OrderHeader.revise``,
both of which take the totals from the Aggregate Calculator.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, time
from decimal import Decimal

from sales_orders.domain.exceptions import ValidationError
from sales_orders.domain.model.status import OrderStatus
from sales_orders.domain.model.value_objects import Money, Quantity
from sales_orders.domain.service.aggregate_calculator import OrderTotals

# Width of the text columns that hold these fields.
ORDER_NUMBER_MAX_LENGTH = 64
PRODUCT_ID_MAX_LENGTH = 64


@dataclass(frozen=True)
class OrderLineItem:
    """One product line.  ``line_total`` is caller supplied."""

    product_id: str
    quantity: Quantity
    unit_price: Money
    line_total: Money
    id: int | None = None
    order_id: int | None = None

    @property
    def expected_total(self) -> Decimal:
        return self.unit_price.amount * self.quantity.value


@dataclass
class OrderHeader:
    """Summary record for one order.

    Use ``create()`` for new orders and ``revise()`` for full updates.
    The ``__init__`` is intentionally simple so the store can
    reconstitute persisted rows without re-validating.
    """

    id: int | None
    order_number: str
    order_date: date
    item_count: int
    final_price: Money
    status: OrderStatus = OrderStatus.PENDING

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def create(
        order_number: str | None,
        order_date: date | str | None,
        totals: OrderTotals,
    ) -> OrderHeader:
        """Build the header of a new order in the initial state."""
        return OrderHeader(
            id=None,
            order_number=_clean_order_number(order_number),
            order_date=_coerce_date(order_date),
            item_count=totals.item_count,
            final_price=totals.final_price,
            status=OrderStatus.initial(),
        )

    def revise(
        self,
        order_number: str | None,
        order_date: date | str | None,
        totals: OrderTotals,
    ) -> OrderHeader:
        """Return a copy with new content and totals; id and status are kept."""
        return replace(
            self,
            order_number=_clean_order_number(order_number),
            order_date=_coerce_date(order_date),
            item_count=totals.item_count,
            final_price=totals.final_price,
        )

    @property
    def is_locked(self) -> bool:
        return self.status.is_terminal


@dataclass(frozen=True)
class Order:
    """A header together with its line items in creation order."""

    header: OrderHeader
    items: list[OrderLineItem]

    @property
    def id(self) -> int | None:
        return self.header.id

    @property
    def status(self) -> OrderStatus:
        return self.header.status


# ---------------------------------------------------------------------------
# Field validation
# ---------------------------------------------------------------------------


def validate_header_fields(
    order_number: str | None, order_date: date | str | None
) -> tuple[str, date]:
    """Check caller-supplied header fields without building a header."""
    return _clean_order_number(order_number), _coerce_date(order_date)


def _clean_order_number(raw: str | None) -> str:
    if raw is None or not str(raw).strip():
        raise ValidationError("Order number is required")
    number = str(raw).strip()
    if len(number) > ORDER_NUMBER_MAX_LENGTH:
        raise ValidationError(
            f"Order number cannot be longer than {ORDER_NUMBER_MAX_LENGTH} characters"
        )
    return number


def _coerce_date(raw: date | str | None) -> date:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise ValidationError("Order date is required")
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if isinstance(raw, str):
        day, sep, clock = raw.strip().partition("T")
        try:
            parsed = date.fromisoformat(day)
            if sep:
                time.fromisoformat(_utc_offset(clock))
        except ValueError as exc:
            raise ValidationError(
                f"Order date must be an ISO date (YYYY-MM-DD), got {raw!r}"
            ) from exc
        return parsed
    raise ValidationError(f"Order date must be a date, got {type(raw).__name__}")


def _utc_offset(clock: str) -> str:
    # time.fromisoformat only accepts the "Z" suffix from Python 3.11 on.
    if clock.endswith(("Z", "z")):
        return clock[:-1] + "+00:00"
    return clock
