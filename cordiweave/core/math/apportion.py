"""
Apportion: Percentage split with exact rounding reconciliation

Splits a currency amount into shares given integer percentages:

    share_i = round2(total * pct_i / 100)
    residual = total - sum(share_i)
    share_largest += residual

Independently rounded shares can drift from the total by up to half a centavo
each. The residual is always absorbed by the share with the largest
percentage (first one on ties), so that the shares sum to the total exactly.

CRITICAL INVARIANTS:
1. sum(amounts) == total, with no tolerance
2. Only the largest share is ever adjusted
3. Percentages are positive integers summing to 100
"""

from decimal import Decimal
from typing import Final, NamedTuple, Sequence

from cordiweave.core.math.money import percent_of, round2

PERCENT_TOTAL: Final[int] = 100


class Apportionment(NamedTuple):
    """Result of a reconciled split."""

    amounts: tuple[Decimal, ...]
    residual: Decimal  # Amount added to the largest share (may be negative)
    adjusted_index: int  # Position of the share that absorbed the residual


def validate_percentages(percentages: Sequence[int]) -> None:
    """
    Check a percentage table.

    Raises:
        ValueError: If empty, if any entry is not a positive int, or if the
            entries do not sum to 100
    """
    if not percentages:
        raise ValueError("Percentage table must not be empty")

    for pct in percentages:
        if isinstance(pct, bool) or not isinstance(pct, int):
            raise ValueError(f"Percentage must be an int, got {pct!r}")
        if pct <= 0:
            raise ValueError(f"Percentage must be positive, got {pct}")

    total = sum(percentages)
    if total != PERCENT_TOTAL:
        raise ValueError(f"Percentages must sum to {PERCENT_TOTAL}, got {total}")


def largest_share_index(percentages: Sequence[int]) -> int:
    """Index of the largest percentage; the earliest wins on ties."""
    best = 0
    for i, pct in enumerate(percentages):
        if pct > percentages[best]:
            best = i
    return best


def apportion(total: Decimal, percentages: Sequence[int]) -> Apportionment:
    """
    Split total by percentages and reconcile the rounding residue.

    Args:
        total: Amount to split (already a two-decimal currency value)
        percentages: Positive ints summing to 100

    Returns:
        Apportionment with amounts in the order of percentages

    Raises:
        ValueError: If the percentage table is invalid

    Examples:
        >>> apportion(Decimal("1000.00"), [70, 15, 10, 5]).amounts
        (Decimal('700.00'), Decimal('150.00'), Decimal('100.00'), Decimal('50.00'))
        >>> apportion(Decimal("0.05"), [70, 15, 10, 5]).amounts
        (Decimal('0.03'), Decimal('0.01'), Decimal('0.01'), Decimal('0.00'))
    """
    validate_percentages(percentages)

    amounts = [round2(percent_of(total, pct)) for pct in percentages]
    residual = total - sum(amounts, Decimal(0))

    index = largest_share_index(percentages)
    amounts[index] = amounts[index] + residual

    return Apportionment(
        amounts=tuple(amounts),
        residual=residual,
        adjusted_index=index,
    )
