"""JSON Schema contract of the checkout API request body."""

from .validators import (
    CALCULATE_TOTALS_REQUEST,
    CalculateTotalsRequestValidator,
    ContractValidator,
    load_schema,
)

__all__ = [
    "CALCULATE_TOTALS_REQUEST",
    "CalculateTotalsRequestValidator",
    "ContractValidator",
    "load_schema",
]
