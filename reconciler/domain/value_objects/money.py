"""Value Object Money - a monetary amount with its currency."""

from dataclasses import dataclass
from decimal import Decimal

CURRENCY_SYMBOLS = {
    "USD": "$",
    "CAD": "$",
    "AUD": "$",
    "EUR": "€",
    "GBP": "£",
}


@dataclass(frozen=True)
class Money:
    """
    Immutable monetary amount in major units.

    Stripe carries amounts in the minor unit (cents); build a Money with
    `from_minor` only when the amount is about to be displayed. Stored values
    stay in minor units.

    Attributes:
        amount: Decimal amount (two decimal places).
        currency_code: ISO 4217 code (USD, EUR, ...).
    """

    amount: Decimal
    currency_code: str

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))

        if len(self.currency_code) != 3:
            raise ValueError(f"currency_code must be 3 characters: {self.currency_code}")
        object.__setattr__(self, "currency_code", self.currency_code.upper())

        if self.amount < 0:
            raise ValueError(f"amount cannot be negative: {self.amount}")

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency_code}"

    def display(self) -> str:
        """Render for customer-facing copy, e.g. `$100.00`."""
        symbol = CURRENCY_SYMBOLS.get(self.currency_code)
        if symbol is None:
            return str(self)
        return f"{symbol}{self.amount:.2f}"

    @classmethod
    def from_minor(cls, minor_units: int, currency_code: str) -> "Money":
        """Build from the processor's minor unit (cents)."""
        return cls(amount=Decimal(minor_units) / 100, currency_code=currency_code)

    def to_minor(self) -> int:
        return int(self.amount * 100)
