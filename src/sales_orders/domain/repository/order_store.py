"""Abstract persistence gateway for the Order aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  A store hands out one ``OrderTransaction`` per
operation through ``transaction()``:

    with store.transaction() as tx:
        header = tx.insert_order_header(header)
        ...

Leaving the block normally commits; leaving it by any exception rolls
back every statement issued through ``tx`` and re-raises.  Storage
failures surface as ``PersistenceError``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from sales_orders.domain.model.order import OrderHeader, OrderLineItem
from sales_orders.domain.model.status import OrderStatus


class OrderTransaction(ABC):
    """Row-level operations, all bound to one atomic unit of work."""

    @abstractmethod
    def insert_order_header(self, header: OrderHeader) -> OrderHeader:
        """Insert a header and return it with its assigned ID."""

    @abstractmethod
    def insert_line_item(self, order_id: int, item: OrderLineItem) -> OrderLineItem:
        """Insert a line item owned by *order_id*; return it with its ID."""

    @abstractmethod
    def update_order_header(self, header: OrderHeader) -> None:
        """Overwrite number, date and totals of an existing header."""

    @abstractmethod
    def update_order_status(self, order_id: int, status: OrderStatus) -> None:
        """Set the status column only."""

    @abstractmethod
    def delete_line_items_for_order(self, order_id: int) -> int:
        """Delete every line item of an order; return how many went."""

    @abstractmethod
    def delete_order_header(self, order_id: int) -> None:
        """Delete a header row."""

    @abstractmethod
    def get_order_header(self, order_id: int) -> OrderHeader | None:
        """Return a header by ID, or None if not found."""

    @abstractmethod
    def get_line_items_for_order(self, order_id: int) -> list[OrderLineItem]:
        """Return an order's line items in creation order."""

    @abstractmethod
    def list_order_headers(self) -> list[OrderHeader]:
        """Return every header, newest first."""


class OrderStore(ABC):

    @abstractmethod
    def transaction(self) -> AbstractContextManager[OrderTransaction]:
        """Open a scoped transaction: commit on exit, roll back on error."""
