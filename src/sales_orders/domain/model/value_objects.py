"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from sales_orders.domain.exceptions import ValidationError

# Amounts are stored as NUMERIC(MONEY_DIGITS, MONEY_PLACES); anything finer or
# larger would be rounded by the store and break the totals invariant.
MONEY_DIGITS = 14
MONEY_PLACES = 2
_CENT = Decimal(1).scaleb(-MONEY_PLACES)
_MONEY_LIMIT = Decimal(10) ** (MONEY_DIGITS - MONEY_PLACES)

# Quantities are stored in a 32-bit INTEGER column.
MAX_QUANTITY = 2**31 - 1


@dataclass(frozen=True)
class Money:
    """Non-negative monetary amount.

    Uses Decimal to avoid floating-point drift when summing line totals.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )
        if self.amount >= _MONEY_LIMIT:
            raise ValidationError(
                f"Money amount must be less than {_MONEY_LIMIT}, got {self.amount}"
            )
        if self.amount.quantize(_CENT) != self.amount:
            raise ValidationError(
                f"Money amount cannot have more than {MONEY_PLACES} decimal places, "
                f"got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + other.amount)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.amount:.2f}"

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0"))

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        if isinstance(amount, bool):
            raise ValidationError(f"Invalid money amount: {amount!r}")
        try:
            return Money(Decimal(str(amount).strip()))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")
        if self.value > MAX_QUANTITY:
            raise ValidationError(
                f"Quantity cannot exceed {MAX_QUANTITY}, got {self.value}"
            )

    def __str__(self) -> str:
        return str(self.value)

    @staticmethod
    def of(value: str | int | Decimal) -> Quantity:
        """Coerce integral text or numbers (``"2"``, ``2.0``) into a Quantity."""
        if isinstance(value, bool):
            raise ValidationError(f"Invalid quantity: {value!r}")
        try:
            number = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid quantity: {value!r}") from exc
        if not number.is_finite() or number != number.to_integral_value():
            raise ValidationError(f"Quantity must be a whole number, got {value!r}")
        if number > MAX_QUANTITY:
            raise ValidationError(f"Quantity cannot exceed {MAX_QUANTITY}, got {value!r}")
        return Quantity(int(number))
