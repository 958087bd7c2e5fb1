"""
Monetary precision helpers.

Prices are stored as two-decimal Decimals, but every sum, discount and point
calculation in the order engine runs on integer minor units (cents) so that
totals never drift.

Key Principles:
1. NEVER use float for money
2. Always quantize Decimals BEFORE converting to minor units
3. Use ROUND_HALF_EVEN (banker's rounding) to prevent systematic bias
"""

from decimal import Decimal, ROUND_HALF_EVEN
from typing import Union

# The restaurant trades in a single two-decimal currency.
MINOR_UNIT_EXPONENT = 2
CENTS_PER_UNIT = 10 ** MINOR_UNIT_EXPONENT
QUANTUM = Decimal(1).scaleb(-MINOR_UNIT_EXPONENT)  # Decimal('0.01')

Amount = Union[Decimal, str, int, float, None]


def quantize(amount: Amount) -> Decimal:
    """
    Round to two decimals using banker's rounding (ROUND_HALF_EVEN).

    Examples:
        >>> quantize("10.127")
        Decimal('10.13')
        >>> quantize("10.125")
        Decimal('10.12')  # Banker's rounding
        >>> quantize(None)
        Decimal('0.00')
    """
    if amount is None:
        amount = 0
    if isinstance(amount, float):
        # Convert float to string first to avoid precision issues
        amount = str(amount)

    return Decimal(amount).quantize(QUANTUM, rounding=ROUND_HALF_EVEN)


def to_minor(amount: Amount) -> int:
    """
    Convert to minor units (cents) after quantization.

    Examples:
        >>> to_minor("10.127")
        1013
        >>> to_minor(Decimal("7.50"))
        750
    """
    return int((quantize(amount) * CENTS_PER_UNIT).to_integral_value())


def from_minor(minor: int) -> Decimal:
    """
    Convert minor units back to a two-decimal Decimal.

    Examples:
        >>> from_minor(350)
        Decimal('3.50')
    """
    return quantize(Decimal(minor) / CENTS_PER_UNIT)


def whole_units(minor: int) -> int:
    """Number of whole currency units in an amount of cents (floor, never negative)."""
    return max(0, minor) // CENTS_PER_UNIT


def format_money(minor: int) -> str:
    """
    Format minor units as a human-readable string.

    Examples:
        >>> format_money(1013)
        '$10.13'
    """
    return f"${from_minor(minor):,.2f}"
