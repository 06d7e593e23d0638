"""Donations: transparency reporting of completed donations.

- DonationAllocationReporter: reconciled 70/15/10/5 bucket split and
  30/25/25/20 split of the artisan-support bucket
- Beneficiary reference data
- Receipt assembly for completed donations
"""

from .allocation import (
    DEFAULT_BUCKET_PERCENTAGES,
    AllocationConfig,
    DonationAllocationReporter,
    allocate,
    parse_donation_amount,
)
from .beneficiaries import (
    DEFAULT_BENEFICIARIES,
    DEFAULT_BENEFICIARY_PERCENTAGES,
    BeneficiaryRegistry,
)
from .receipt import (
    DonationReceipt,
    DonationRepository,
    InMemoryDonationRepository,
    build_receipt,
    compute_impact,
)

__all__ = [
    "DEFAULT_BUCKET_PERCENTAGES",
    "AllocationConfig",
    "DonationAllocationReporter",
    "allocate",
    "parse_donation_amount",
    "DEFAULT_BENEFICIARIES",
    "DEFAULT_BENEFICIARY_PERCENTAGES",
    "BeneficiaryRegistry",
    "DonationReceipt",
    "DonationRepository",
    "InMemoryDonationRepository",
    "build_receipt",
    "compute_impact",
]
