"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from storefront.domain.exceptions import ValidationError

CENT = Decimal("0.01")

_CURRENCY_SYMBOLS = {"USD": "$"}


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.
    """

    amount: Decimal
    currency: str = "USD"

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

    def rounded(self) -> Money:
        """Round to cents, half away from zero."""
        return Money(self.amount.quantize(CENT, rounding=ROUND_HALF_UP), self.currency)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        value = self.amount.quantize(CENT, rounding=ROUND_HALF_UP)
        symbol = _CURRENCY_SYMBOLS.get(self.currency)
        if symbol:
            return f"{symbol}{value}"
        return f"{value} {self.currency}"

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = "USD") -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)), currency.upper())
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


# ---------------------------------------------------------------------------
# Postal addresses
# ---------------------------------------------------------------------------
POSTAL_CODE_PATTERNS = {"US": re.compile(r"[0-9]{5}")}
MIN_REGION_LENGTH = 2

# The backend rejects empty name parts, a single space is accepted.
NAME_PLACEHOLDER = " "


def split_full_name(full_name: str) -> tuple[str, str]:
    """Split a free-text name into (first, last) at the first whitespace.

    Lossy for multi-word given names: "Mary Ann Smith" becomes
    ("Mary", "Ann Smith").
    """
    parts = full_name.strip().split(maxsplit=1)
    first = parts[0] if parts else NAME_PLACEHOLDER
    last = parts[1] if len(parts) > 1 else NAME_PLACEHOLDER
    return first, last


def _validate_location(
    street1: str, city: str, region: str, postal_code: str, country: str
) -> None:
    if not street1.strip() or not city.strip():
        raise ValidationError("Please enter street and city first")
    if len(region.strip()) < MIN_REGION_LENGTH:
        raise ValidationError("Please enter state")
    pattern = POSTAL_CODE_PATTERNS.get(country)
    if pattern is None:
        raise ValidationError(f"Unsupported country: {country!r}")
    if not pattern.fullmatch(postal_code):
        raise ValidationError("ZIP code must be 5 digits")


@dataclass(frozen=True)
class PostalAddress:
    """A validated address in the shape the commerce backend expects."""

    first_name: str
    last_name: str
    street1: str
    city: str
    region: str
    postal_code: str
    country: str = "US"
    street2: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class AddressInput:
    """Shipping address as typed by the customer, with a single name field."""

    full_name: str
    street1: str
    city: str
    region: str
    postal_code: str
    country: str = "US"
    street2: str = ""

    def validated(self) -> PostalAddress:
        country = self.country.strip().upper()
        postal_code = self.postal_code.strip()
        _validate_location(self.street1, self.city, self.region, postal_code, country)
        first, last = split_full_name(self.full_name)
        return PostalAddress(
            first_name=first,
            last_name=last,
            street1=self.street1.strip(),
            street2=self.street2.strip(),
            city=self.city.strip(),
            region=self.region.strip(),
            postal_code=postal_code,
            country=country,
        )


@dataclass(frozen=True)
class BillingInput:
    """Billing details; first and last name are entered separately."""

    first_name: str
    last_name: str
    street1: str
    city: str
    region: str
    postal_code: str
    country: str = "US"
    street2: str = ""

    def validated(self) -> PostalAddress:
        if not self.first_name.strip() or not self.last_name.strip():
            raise ValidationError(
                "First name and last name are required in billing address"
            )
        country = self.country.strip().upper()
        postal_code = self.postal_code.strip()
        _validate_location(self.street1, self.city, self.region, postal_code, country)
        return PostalAddress(
            first_name=self.first_name.strip(),
            last_name=self.last_name.strip(),
            street1=self.street1.strip(),
            street2=self.street2.strip(),
            city=self.city.strip(),
            region=self.region.strip(),
            postal_code=postal_code,
            country=country,
        )
