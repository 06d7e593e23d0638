"""
Money: Fixed-point currency primitives

Single sanctioned way to turn collaborator values into currency amounts and to
round them. Every amount in the system is a ``decimal.Decimal``; binary floats
are never used for arithmetic.

- Conversion of lookup values (Decimal, int, numeric str) into Decimal
- round2: round-half-up to two fraction digits (not banker's rounding)
- Validation of amounts that must already be currency values

CRITICAL INVARIANTS:
1. round2 is the only rounding function applied to money
2. Half-way values always round away from zero (10.005 -> 10.01)
3. NaN/Infinity never enter a calculation (rejected on conversion)
4. All operations are deterministic and reproducible
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Final, Union

MoneyInput = Union[Decimal, int, str]


# =============================================================================
# CONSTANTS
# =============================================================================

# Minor unit of the peso (centavo)
MONEY_QUANTUM: Final[Decimal] = Decimal("0.01")

# Maximum fraction digits of a currency amount
MONEY_FRACTION_DIGITS: Final[int] = 2

# Rounding mode used for every currency rounding
MONEY_ROUNDING: Final[str] = ROUND_HALF_UP

ZERO_MONEY: Final[Decimal] = Decimal("0.00")


# =============================================================================
# CONVERSION
# =============================================================================


def to_decimal(value: MoneyInput) -> Decimal:
    """
    Exact conversion of a collaborator value into Decimal.

    Floats are converted through their shortest repr (``Decimal(str(x))``) so
    that ``1500.0`` from a legacy lookup becomes ``Decimal("1500.0")`` and not
    the binary expansion. Booleans are rejected even though they are ints.

    Args:
        value: Decimal, int, float or numeric string

    Returns:
        Finite Decimal with the same value

    Raises:
        TypeError: For bool or non-numeric types
        ValueError: For malformed strings and NaN/Infinity

    Examples:
        >>> to_decimal("1500.00")
        Decimal('1500.00')
        >>> to_decimal(3)
        Decimal('3')
    """
    if isinstance(value, bool):
        raise TypeError(f"Boolean is not a currency amount: {value!r}")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            raise ValueError(f"Malformed amount: {value!r}") from None
    else:
        raise TypeError(f"Unsupported amount type: {type(value).__name__}")

    if not result.is_finite():
        raise ValueError(f"Amount must be finite, got {value!r}")

    return result


def fraction_digits(value: Decimal) -> int:
    """
    Number of significant fraction digits of a finite Decimal.

    Trailing zeros do not count: ``Decimal("1.50")`` has one.

    Examples:
        >>> fraction_digits(Decimal("10.005"))
        3
        >>> fraction_digits(Decimal("150"))
        0
    """
    exponent = value.normalize().as_tuple().exponent
    return max(0, -exponent)


# =============================================================================
# ROUNDING
# =============================================================================


def _quantize(value: Decimal) -> Decimal:
    try:
        return value.quantize(MONEY_QUANTUM, rounding=MONEY_ROUNDING)
    except InvalidOperation:
        # quantize needs more digits than the context precision allows
        raise ValueError(f"Amount {value} is out of range") from None


def round2(value: MoneyInput) -> Decimal:
    """
    Round-half-up to two fraction digits.

    Args:
        value: Any exact amount (unrounded sums and products included)

    Returns:
        Decimal quantized to MONEY_QUANTUM

    Raises:
        ValueError: If the amount is too large to carry two fraction digits
            within the decimal context precision

    Examples:
        >>> round2(Decimal("10.005"))
        Decimal('10.01')
        >>> round2(Decimal("11.9988"))
        Decimal('12.00')
        >>> round2(Decimal("0.125"))
        Decimal('0.13')
    """
    return _quantize(to_decimal(value))


def percent_of(amount: Decimal, percentage: int) -> Decimal:
    """
    Exact ``amount * percentage / 100`` (not rounded).

    Division by 100 is exact in base 10. Amounts that overflow the context
    precision are caught later by round2.
    """
    return amount * Decimal(percentage) / Decimal(100)


# =============================================================================
# VALIDATION
# =============================================================================


def is_money(value: Decimal) -> bool:
    """True if value is finite and has at most two fraction digits."""
    return value.is_finite() and fraction_digits(value) <= MONEY_FRACTION_DIGITS


def to_money(value: MoneyInput) -> Decimal:
    """
    Normalize a value that must already be a currency amount.

    Unlike round2 this never changes the value: ``150`` becomes ``150.00``
    but ``150.005`` is rejected.

    Raises:
        TypeError: See to_decimal
        ValueError: If the value has more than two fraction digits or does
            not fit the decimal context precision once quantized
    """
    result = to_decimal(value)
    if fraction_digits(result) > MONEY_FRACTION_DIGITS:
        raise ValueError(
            f"Amount {value!r} has more than {MONEY_FRACTION_DIGITS} fraction digits"
        )
    return _quantize(result)


def validate_positive_money(value: MoneyInput) -> Decimal:
    """
    Validate a strictly positive currency amount (e.g. a donation).

    Float inputs are rejected here: a positive amount entering the system
    must come as Decimal, int or string.

    Raises:
        TypeError: For float, bool and unsupported types
        ValueError: For non-positive, non-finite or over-precise values
    """
    if isinstance(value, float):
        raise TypeError(f"Float amounts are not accepted: {value!r}")

    amount = to_money(value)
    if amount <= 0:
        raise ValueError(f"Amount must be positive, got {amount}")
    return amount


def format_money(value: Decimal) -> str:
    """
    Plain two-decimal rendering used in API payloads.

    Examples:
        >>> format_money(Decimal("3510"))
        '3510.00'
    """
    return f"{round2(value):f}"
