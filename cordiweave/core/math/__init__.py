"""
Core math modules for CordiWeave

Fixed-point currency primitives and reconciled percentage splits.
"""

# Money
from cordiweave.core.math.money import (
    MONEY_FRACTION_DIGITS,
    MONEY_QUANTUM,
    MONEY_ROUNDING,
    ZERO_MONEY,
    MoneyInput,
    format_money,
    fraction_digits,
    is_money,
    percent_of,
    round2,
    to_decimal,
    to_money,
    validate_positive_money,
)

# Apportion
from cordiweave.core.math.apportion import (
    PERCENT_TOTAL,
    Apportionment,
    apportion,
    largest_share_index,
    validate_percentages,
)

__all__ = [
    # Money: Constants
    "MONEY_FRACTION_DIGITS",
    "MONEY_QUANTUM",
    "MONEY_ROUNDING",
    "ZERO_MONEY",
    # Money: Types
    "MoneyInput",
    # Money: Functions
    "format_money",
    "fraction_digits",
    "is_money",
    "percent_of",
    "round2",
    "to_decimal",
    "to_money",
    "validate_positive_money",
    # Apportion
    "PERCENT_TOTAL",
    "Apportionment",
    "apportion",
    "largest_share_index",
    "validate_percentages",
]
