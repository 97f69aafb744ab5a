"""Value Objects for the domain layer.

Value objects are immutable objects that are defined by their attributes
rather than identity. They are interchangeable when their values are equal.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Self
from uuid import uuid4

from fulfillment.domain.base import ValueObject
from fulfillment.domain.exceptions import (
    CurrencyMismatchError,
    NegativeMoneyError,
    ValidationError,
)

# Amounts are kept at the precision of the storage column.
_CENTS = Decimal("0.01")
# Numeric(19, 2) leaves 17 integer digits.
_MAX_AMOUNT = Decimal("1e17")


def _require_text(field: str, value: object, max_length: int | None = None) -> str:
    """Return a stripped, non-empty string or raise ValidationError."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field, "must be a non-empty string", value=value)
    value = value.strip()
    if max_length is not None and len(value) > max_length:
        raise ValidationError(field, f"must be at most {max_length} characters", value=value)
    return value


def _require_code(field: str, value: object, length: int) -> str:
    """Return an upper-cased alphabetic code of exactly ``length`` letters."""
    text = _require_text(field, value)
    if len(text) != length or not text.isalpha():
        raise ValidationError(field, f"must be a {length}-letter code", value=value)
    return text.upper()


# ============================================================================
# Typed Identifiers
# ============================================================================


@dataclass(frozen=True)
class OrderId(ValueObject):
    """Strongly-typed order identifier.

    Order ids are stored as strings; freshly generated ids are UUID4s.
    """

    value: str

    def __post_init__(self) -> None:
        """Validate order ID format."""
        object.__setattr__(self, "value", _require_text("order_id", self.value, max_length=50))

    @classmethod
    def generate(cls) -> Self:
        """Generate a new order ID.

        Returns:
            New OrderId with random UUID.
        """
        return cls(value=str(uuid4()))

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=value)

    def __str__(self) -> str:
        return self.value


# ============================================================================
# Money Value Object
# ============================================================================


@dataclass(frozen=True)
class Money(ValueObject):
    """Represents monetary value with currency.

    The amount is an exact decimal rounded half-up to two fractional
    digits, matching the fixed-precision column it is stored in.

    Attributes:
        amount: Amount in major units (e.g., dollars).
        currency: ISO 4217 currency code (e.g., 'USD', 'EUR').
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        """Validate money constraints."""
        if not isinstance(self.amount, Decimal):
            raise ValidationError("amount", "must be a Decimal", value=self.amount)
        if not self.amount.is_finite():
            raise ValidationError("amount", "must be finite", value=self.amount)
        try:
            amount = self.amount.quantize(_CENTS, rounding=ROUND_HALF_UP)
        except InvalidOperation as exc:
            raise ValidationError("amount", "is too large", value=self.amount) from exc
        if amount < 0:
            raise NegativeMoneyError(self.amount)
        if amount >= _MAX_AMOUNT:
            raise ValidationError("amount", "must have at most 17 integer digits", value=self.amount)
        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "currency", _require_code("currency", self.currency, 3))

    @classmethod
    def of(cls, amount: Decimal | int | str | float, currency: str = "USD") -> Self:
        """Create money from any numeric amount.

        Floats are converted through their string form so that
        ``Money.of(29.99)`` is exactly 29.99.

        Args:
            amount: Amount in major units.
            currency: Currency code.

        Returns:
            Money instance.

        Raises:
            ValidationError: If the amount is not a number.
        """
        if isinstance(amount, bool):
            raise ValidationError("amount", "must be a number", value=amount)
        try:
            value = Decimal(str(amount)) if isinstance(amount, float) else Decimal(amount)
        except (InvalidOperation, TypeError, ValueError) as exc:
            raise ValidationError("amount", "must be a number", value=amount) from exc
        return cls(amount=value, currency=currency)

    @classmethod
    def usd(cls, amount: Decimal | int | str | float) -> Self:
        return cls.of(amount, "USD")

    @classmethod
    def zero(cls, currency: str = "USD") -> Self:
        """Create zero amount money.

        Args:
            currency: Currency code.

        Returns:
            Money with zero amount.
        """
        return cls(amount=Decimal("0"), currency=currency)

    def _check_currency(self, other: "Money") -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchError(self.currency, other.currency)

    def __add__(self, other: "Money") -> "Money":
        """Add two money amounts.

        Raises:
            CurrencyMismatchError: If currencies don't match.
        """
        self._check_currency(other)
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract money amounts.

        Raises:
            CurrencyMismatchError: If currencies don't match.
            NegativeMoneyError: If result would be negative.
        """
        self._check_currency(other)
        return Money(amount=self.amount - other.amount, currency=self.currency)

    def __mul__(self, quantity: int) -> "Money":
        """Multiply money by an integer quantity."""
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            return NotImplemented
        return Money(amount=self.amount * quantity, currency=self.currency)

    def __rmul__(self, quantity: int) -> "Money":
        return self.__mul__(quantity)

    def __str__(self) -> str:
        """Return formatted string representation.

        Returns:
            Formatted money string (e.g., '$12.99 USD').
        """
        symbol = {"USD": "$", "EUR": "€", "GBP": "£"}.get(self.currency, "")
        return f"{symbol}{self.amount:.2f} {self.currency}"

    def is_zero(self) -> bool:
        return self.amount == 0


# ============================================================================
# Address Value Object
# ============================================================================


@dataclass(frozen=True)
class Address(ValueObject):
    """Shipping address embedded in an order.

    Attributes:
        street: Street line.
        city: City name.
        state: Two-letter state/province code.
        zip_code: Postal/ZIP code, at most 10 characters.
        country: ISO 3166-1 alpha-2 country code.
    """

    street: str
    city: str
    state: str
    zip_code: str
    country: str

    def __post_init__(self) -> None:
        """Validate and normalize address fields."""
        object.__setattr__(self, "street", _require_text("street", self.street, max_length=255))
        object.__setattr__(self, "city", _require_text("city", self.city, max_length=255))
        object.__setattr__(self, "state", _require_code("state", self.state, 2))
        object.__setattr__(self, "zip_code", _require_text("zip_code", self.zip_code, max_length=10))
        object.__setattr__(self, "country", _require_code("country", self.country, 2))

    @classmethod
    def of(cls, street: str, city: str, state: str, zip_code: str, country: str) -> Self:
        return cls(street=street, city=city, state=state, zip_code=zip_code, country=country)

    def format_single_line(self) -> str:
        """Format address as single line.

        Returns:
            Formatted address string.
        """
        return ", ".join([self.street, self.city, self.state, self.zip_code, self.country])
