"""
Currency and number normalization.

Two separate paths:
- display: anything in, a Naira string out, invalid input shows as zero
- submission: strict parsing that raises ValidationError before a request
  is ever sent

All rounding goes through ROUND_HALF_UP so cost, profit and gateway
subunit conversion agree with each other.
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, getcontext, localcontext
from typing import Any

from stockbook.core.exceptions import ValidationError

CURRENCY_CODE = "NGN"
CURRENCY_SYMBOL = "₦"
SUBUNITS_PER_UNIT = 100  # kobo per naira

ZERO = Decimal("0")
CENT = Decimal("0.01")
ROUNDING = ROUND_HALF_UP

# Thousands separators must group digits in threes: "1,234.50", not "1,2,3"
_GROUPED_NUMBER = re.compile(r"^[+-]?\d{1,3}(,\d{3})+(\.\d+)?$")


def is_blank(value: Any) -> bool:
    """True for None and whitespace-only strings."""
    return value is None or (isinstance(value, str) and not value.strip())


def to_decimal(value: Any) -> Decimal | None:
    """
    Coerce a loosely-typed value to a finite Decimal.

    Returns None for anything that is not a number: None, bools, blank
    strings, NaN/infinity, and unparseable text.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        # str() keeps the shortest repr, so 0.1 stays 0.1
        result = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip().replace(",", "").replace(CURRENCY_SYMBOL, "")
        if not text:
            return None
        try:
            result = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None

    if not result.is_finite():
        return None
    return result


def _quantize(value: Decimal, exp: Decimal) -> Decimal:
    # quantize needs room for every integer digit plus the kept decimals
    with localcontext() as ctx:
        ctx.prec = max(getcontext().prec, value.adjusted() + 4)
        return value.quantize(exp, rounding=ROUNDING)


def round_money(value: Decimal) -> Decimal:
    """Round to two decimal places, whatever the magnitude."""
    return _quantize(value, CENT)


def format_currency(value: Any, symbol: str = CURRENCY_SYMBOL) -> str:
    """
    Format a value for display, e.g. ``₦1,234.56`` or ``-₦100.00``.

    Display-only: invalid input renders as ``₦0.00`` and must never be fed
    back into a stored or submitted value.
    """
    amount = to_decimal(value)
    if amount is None:
        amount = ZERO

    try:
        rounded = round_money(amount)
    except InvalidOperation:
        rounded = round_money(ZERO)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,.2f}"


def parse_required(value: Any, field: str, non_negative: bool = True) -> Decimal:
    """Strict parse for a required numeric form field."""
    if is_blank(value):
        raise ValidationError(field, "is required", value)
    if isinstance(value, str) and "," in value:
        text = value.strip().replace(CURRENCY_SYMBOL, "").strip()
        if not _GROUPED_NUMBER.match(text):
            raise ValidationError(field, "must be a number", value)

    result = to_decimal(value)
    if result is None:
        raise ValidationError(field, "must be a number", value)
    if non_negative and result < 0:
        raise ValidationError(field, "must not be negative", value)
    return result


def parse_optional(
    value: Any,
    field: str,
    default: Decimal = ZERO,
    non_negative: bool = True,
) -> Decimal:
    """Strict parse for an optional numeric field; blank means ``default``."""
    if is_blank(value):
        return default
    return parse_required(value, field, non_negative=non_negative)


def to_subunit(amount: Decimal) -> int:
    """Convert major units (naira) to the gateway's subunit (kobo)."""
    with localcontext() as ctx:
        ctx.prec = max(getcontext().prec, amount.adjusted() + 4)
        subunits = amount * SUBUNITS_PER_UNIT
    return int(_quantize(subunits, Decimal("1")))


def as_float(value: Decimal | None) -> float | None:
    """JSON-friendly float for wire payloads and view models."""
    return float(value) if value is not None else None
