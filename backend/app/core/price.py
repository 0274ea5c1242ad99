"""Price — immutable monetary amount with a 3-letter currency code.

Invariants:
    - amount is a finite Decimal >= 0
    - currency is non-empty and exactly 3 characters
    - add/subtract require matching currencies and return a new Price
    - subtract never yields a negative amount (raises InvalidPriceError instead)
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from app.core.domain_types import CURRENCY_CODE_LENGTH
from app.core.errors import CurrencyMismatchError, InvalidPriceError


def _to_decimal(amount) -> Decimal:
    if isinstance(amount, bool):
        raise InvalidPriceError("price amount must be a number")
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise InvalidPriceError("price amount must be a number") from None
    if not value.is_finite():
        raise InvalidPriceError("price amount must be finite")
    return value


@dataclass(frozen=True)
class Price:
    """Value object — construct through Price(amount, currency), validated on init."""

    amount: Decimal
    currency: str

    def __post_init__(self):
        amount = _to_decimal(self.amount)
        if amount < 0:
            raise InvalidPriceError("price amount cannot be negative")
        if not self.currency:
            raise InvalidPriceError("currency cannot be empty")
        if len(self.currency) != CURRENCY_CODE_LENGTH:
            raise InvalidPriceError("currency must be a 3-letter ISO code")
        object.__setattr__(self, "amount", amount)

    def is_zero(self) -> bool:
        return self.amount == 0

    def equals(self, other: "Price") -> bool:
        return self == other

    def add(self, other: "Price") -> "Price":
        self._require_same_currency(other)
        return Price(self.amount + other.amount, self.currency)

    def subtract(self, other: "Price") -> "Price":
        self._require_same_currency(other)
        return Price(self.amount - other.amount, self.currency)

    def _require_same_currency(self, other: "Price") -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchError(self.currency, other.currency)

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"
