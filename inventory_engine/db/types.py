"""
Module: inventory_engine.db.types
Responsibility: Price precision, rounding and currency helpers shared by
    validation, services and selectors, so every write and every report
    rounds the same way.
Architecture position: Engine > DB.  May be imported by models/, domain/,
    services/, and selectors/.  MUST NOT import from any of those layers.

Invariants enforced:
    - No floats for prices.  All prices use Decimal with two decimal places.
    - round_money() is the only rounding function applied to prices and
      valuation totals.

Failure modes:
    - ValueError on a currency label that is not three uppercase letters.
"""

import re
from decimal import ROUND_HALF_UP, Decimal

MONEY_DECIMAL_PLACES = 2
DEFAULT_ROUNDING = ROUND_HALF_UP
DEFAULT_CURRENCY = "USD"

# Numeric(12, 2) holds ten integer digits
PRICE_LIMIT = Decimal(10) ** 10

_CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")


def round_money(
    value: Decimal,
    decimal_places: int = MONEY_DECIMAL_PLACES,
    rounding: str = DEFAULT_ROUNDING,
) -> Decimal:
    """
    Round a monetary value to specified decimal places.

    Args:
        value: The Decimal value to round.
        decimal_places: Number of decimal places to round to.
        rounding: Rounding mode (default: ROUND_HALF_UP).

    Returns:
        Rounded Decimal value.
    """
    quantize_str = "0." + "0" * decimal_places
    return value.quantize(Decimal(quantize_str), rounding=rounding)


def to_decimal(value) -> Decimal:
    """
    Coerce a stored numeric value to Decimal.

    Aggregates come back from SQLite as float; ``str()`` first so the binary
    representation does not leak into the result.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def validate_currency(currency: str) -> str:
    """
    Validate a currency label and return it normalized (uppercase, trimmed).

    Raises:
        ValueError: If the label is not a three-letter code.
    """
    if not currency or not isinstance(currency, str):
        raise ValueError(f"Invalid currency code: '{currency}'")

    normalized = currency.upper().strip()
    if not _CURRENCY_PATTERN.match(normalized):
        raise ValueError(f"Invalid currency code: '{currency}'")
    return normalized
