"""Order lifecycle states.

Every state may move to every other state through an explicit status
change.  ``COMPLETED`` is terminal only in the sense that an order's
*content* is locked there; the lock itself is enforced by the use-case
handlers, not here.
"""

from __future__ import annotations

from enum import Enum

from sales_orders.domain.exceptions import InvalidStateError


class OrderStatus(Enum):
    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"

    @property
    def is_terminal(self) -> bool:
        return self is OrderStatus.COMPLETED

    @property
    def label(self) -> str:
        return _LABELS[self]

    @staticmethod
    def initial() -> OrderStatus:
        return OrderStatus.PENDING

    @staticmethod
    def parse(raw: object) -> OrderStatus:
        """Resolve user input to a status.

        Accepts the stored value, the display label, or the enum name,
        case-insensitively (``"Completed"``, ``"in progress"``,
        ``"IN_PROGRESS"``).
        """
        if isinstance(raw, OrderStatus):
            return raw
        if isinstance(raw, str):
            key = raw.strip().lower().replace(" ", "").replace("_", "")
            for status in OrderStatus:
                if key == status.value.lower():
                    return status
        allowed = ", ".join(s.value for s in OrderStatus)
        raise InvalidStateError(f"Invalid status {raw!r}; expected one of: {allowed}")


_LABELS = {
    OrderStatus.PENDING: "Pending",
    OrderStatus.IN_PROGRESS: "In Progress",
    OrderStatus.COMPLETED: "Completed",
}

