"""
Module: ledger_kernel.db.types
Responsibility: Money constants and helpers for stored amounts
    and user-entered amounts.  Centralizes precision, rounding, tolerance and
    amount parsing so that every model, service and report uses identical rules.
Architecture position: Kernel > DB.  May be imported by models/, domain/,
    services/, selectors/ and ledger_modules.  MUST NOT import from any of those.

Invariants enforced:
    - No floats in stored or aggregated money.  Amounts are Decimal with
      explicit precision; float input is converted through its repr so that
      0.1 becomes Decimal("0.1"), not its binary expansion.
    - round_money() is the ONLY sanctioned rounding function.
    - BALANCE_TOLERANCE is the default epsilon for the double-entry check.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

DISPLAY_DECIMAL_PLACES = 2
DEFAULT_ROUNDING = ROUND_HALF_UP

# Largest |credits - debits| still considered balanced
BALANCE_TOLERANCE = Decimal("0.01")

ZERO = Decimal("0")


def parse_amount(raw: Any) -> Decimal:
    """
    Parse a user-entered amount.

    Accepts Decimal, int, float or str.  Anything that is not a finite
    number greater than zero coerces to Decimal("0"), which validation then
    reports as a violation rather than silently dropping the row.

    Example:
        parse_amount("100.50") -> Decimal("100.50")
        parse_amount("abc")    -> Decimal("0")
        parse_amount(-5)       -> Decimal("0")
    """
    if raw is None or isinstance(raw, bool):
        return ZERO

    if isinstance(raw, Decimal):
        value = raw
    else:
        text = str(raw).strip()
        if not text:
            return ZERO
        try:
            value = Decimal(text)
        except InvalidOperation:
            return ZERO

    if not value.is_finite() or value <= ZERO:
        return ZERO
    return value


def round_money(
    value: Decimal,
    decimal_places: int = DISPLAY_DECIMAL_PLACES,
    rounding: str = DEFAULT_ROUNDING,
) -> Decimal:
    """
    Round a monetary value to specified decimal places.

    This is the ONLY sanctioned rounding function for money in the system.
    Aggregation always happens on unrounded Decimals; rounding is applied
    once, at display time.
    """
    quantize_str = "0." + "0" * decimal_places if decimal_places > 0 else "0"
    return value.quantize(Decimal(quantize_str), rounding=rounding)


def within_tolerance(
    left: Decimal,
    right: Decimal,
    tolerance: Decimal = BALANCE_TOLERANCE,
) -> bool:
    """True iff |left - right| <= tolerance."""
    return abs(left - right) <= tolerance
