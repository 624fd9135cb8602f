"""Numeric helpers shared across the domain.

Prices and quantities are Decimals so that the unit price stored with a
record and the one shown to the user come from the same arithmetic.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from pricetable.domain.exceptions import ValidationError

# Unit prices are kept to four decimal places, rounded half up.
UNIT_PRICE_PLACES = Decimal("0.0001")


def positive_decimal(value: str | float | int | Decimal, label: str) -> Decimal:
    """Coerce *value* to a Decimal that is strictly greater than zero."""
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {label}: {value!r}")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid {label}: {value!r}") from exc
    if not result.is_finite():
        raise ValidationError(f"Invalid {label}: {value!r}")
    if result <= 0:
        raise ValidationError(f"{label.capitalize()} must be greater than zero")
    return result


def compute_unit_price(price: Decimal, quantity: Decimal) -> Decimal:
    """Return ``price / quantity`` rounded half up to four places.

    This is the only place a unit price is computed; both the value
    persisted with a record and every displayed value go through it.
    """
    if quantity <= 0:
        raise ValidationError("Quantity must be greater than zero")
    return (price / quantity).quantize(UNIT_PRICE_PLACES, rounding=ROUND_HALF_UP)


def format_unit_price(unit_price: Decimal, unit: str = "") -> str:
    text = f"{unit_price:.4f}"
    return f"{text}/{unit}" if unit else text


def format_amount(amount: Decimal) -> str:
    """Format a price for display, dropping a zero fractional part."""
    if amount == amount.to_integral_value():
        return f"{amount:,.0f}"
    return f"{amount:,.2f}"


def generate_id() -> str:
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
