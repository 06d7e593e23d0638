"""
Domain models and value objects.

Contains the checkout entities (CartLineItem, ShippingOption, OrderTotals)
and the donation transparency entities (DonationAllocation, Beneficiary...).
"""

from cordiweave.core.domain.cart import CartLineItem, ProductId
from cordiweave.core.domain.donation import (
    AllocationBucket,
    Beneficiary,
    BeneficiaryId,
    BeneficiarySubAllocation,
    DonationAllocation,
    DonationBreakdown,
    DonationImpact,
    DonationRecord,
    DonationStatus,
)
from cordiweave.core.domain.shipping import ShippingOption
from cordiweave.core.domain.totals import OrderLineBreakdown, OrderQuote, OrderTotals

__all__ = [
    # Cart
    "CartLineItem",
    "ProductId",
    # Shipping
    "ShippingOption",
    # Totals
    "OrderLineBreakdown",
    "OrderQuote",
    "OrderTotals",
    # Donation
    "AllocationBucket",
    "Beneficiary",
    "BeneficiaryId",
    "BeneficiarySubAllocation",
    "DonationAllocation",
    "DonationBreakdown",
    "DonationImpact",
    "DonationRecord",
    "DonationStatus",
]
