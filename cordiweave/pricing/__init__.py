"""Pricing: checkout order totals.

- OrderTotalsCalculator: subtotal / 12% VAT / shipping / total with
  round-half-up currency rounding
- Lookup collaborators for product prices and shipping options
"""

from .calculator import (
    TAX_RATE,
    OrderTotalsCalculator,
    PricingConfig,
    calculate_subtotal,
    calculate_tax,
    calculate_total,
    compute_totals,
    quote_order,
)
from .catalog import (
    DEFAULT_SHIPPING_OPTIONS,
    InMemoryProductCatalog,
    PriceLookup,
    ProductCatalog,
    ShippingCatalog,
    ShippingLookup,
    StaticShippingCatalog,
)

__all__ = [
    "TAX_RATE",
    "OrderTotalsCalculator",
    "PricingConfig",
    "calculate_subtotal",
    "calculate_tax",
    "calculate_total",
    "compute_totals",
    "quote_order",
    "DEFAULT_SHIPPING_OPTIONS",
    "InMemoryProductCatalog",
    "PriceLookup",
    "ProductCatalog",
    "ShippingCatalog",
    "ShippingLookup",
    "StaticShippingCatalog",
]
