"""
Donation: Transparency allocation models

Immutable Pydantic models describing where a completed donation goes:
four fixed buckets and a further split of the artisan-support bucket across
beneficiary organizations.
"""

from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, model_validator

from cordiweave.core.math.money import format_money

BeneficiaryId = Union[int, str]


# =============================================================================
# ENUMS
# =============================================================================


class AllocationBucket(str, Enum):
    """Transparency buckets of a donation"""

    ARTISAN_SUPPORT = "artisan_support"  # Direct artisan support, split across charities
    MATERIALS = "materials"  # Threads, looms and weaving equipment
    TRAINING = "training"  # Workshops on weaving techniques
    PLATFORM_FEE = "platform_fee"  # Platform operations and support


class DonationStatus(str, Enum):
    """Payment status of a donation as set by the payment-provider webhook"""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


# =============================================================================
# ALLOCATION RESULTS
# =============================================================================


class DonationAllocation(BaseModel):
    """Amount and fixed percentage of one bucket."""

    bucket: AllocationBucket
    amount: Decimal = Field(..., ge=0)
    percentage: int = Field(..., gt=0, le=100)

    model_config = {"frozen": True}


class BeneficiarySubAllocation(BaseModel):
    """Share of the artisan-support bucket going to one beneficiary."""

    beneficiary_id: BeneficiaryId
    amount: Decimal = Field(..., ge=0)
    percentage: int = Field(..., gt=0, le=100)

    model_config = {"frozen": True}


class DonationBreakdown(BaseModel):
    """
    Full reconciled allocation of a donation.

    Invariants (checked on construction):
    - bucket amounts sum exactly to donation_amount
    - beneficiary amounts sum exactly to the artisan_support amount
    """

    donation_amount: Decimal = Field(..., gt=0)
    buckets: tuple[DonationAllocation, ...]
    beneficiaries: tuple[BeneficiarySubAllocation, ...]

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_sums(self) -> "DonationBreakdown":
        """Exact sum checks, no tolerance"""
        bucket_sum = sum((b.amount for b in self.buckets), Decimal(0))
        if bucket_sum != self.donation_amount:
            raise ValueError(
                f"bucket amounts sum to {bucket_sum}, expected {self.donation_amount}"
            )

        artisan = [b for b in self.buckets if b.bucket == AllocationBucket.ARTISAN_SUPPORT]
        if len(artisan) != 1:
            raise ValueError("breakdown must contain exactly one artisan_support bucket")

        beneficiary_sum = sum((b.amount for b in self.beneficiaries), Decimal(0))
        if beneficiary_sum != artisan[0].amount:
            raise ValueError(
                f"beneficiary amounts sum to {beneficiary_sum}, "
                f"expected artisan_support {artisan[0].amount}"
            )
        return self

    def bucket(self, bucket: AllocationBucket) -> DonationAllocation:
        for allocation in self.buckets:
            if allocation.bucket == bucket:
                return allocation
        raise KeyError(bucket)

    def to_payload(self) -> dict[str, Any]:
        return {
            "donation_amount": format_money(self.donation_amount),
            "buckets": [
                {
                    "bucket": b.bucket.value,
                    "amount": format_money(b.amount),
                    "percentage": b.percentage,
                }
                for b in self.buckets
            ],
            "beneficiaries": [
                {
                    "beneficiary_id": b.beneficiary_id,
                    "amount": format_money(b.amount),
                    "percentage": b.percentage,
                }
                for b in self.beneficiaries
            ],
        }


# =============================================================================
# REFERENCE / INPUT MODELS
# =============================================================================


class Beneficiary(BaseModel):
    """Charitable organization receiving part of the artisan-support bucket."""

    id: BeneficiaryId
    name: str = Field(..., min_length=1)
    description: str = ""
    location: str = ""
    established: str = ""

    model_config = {"frozen": True}


class DonationRecord(BaseModel):
    """
    Read-only view of a persisted donation.

    amount is decimal:2 in storage; status must be completed before an
    allocation is reported.
    """

    id: Union[int, str]
    amount: Decimal
    status: DonationStatus
    campaign_id: Optional[int] = None
    is_anonymous: bool = False
    donor_name: Optional[str] = None

    model_config = {"frozen": True}

    def is_completed(self) -> bool:
        return self.status == DonationStatus.COMPLETED

    def donor_display_name(self) -> str:
        if self.is_anonymous or not self.donor_name:
            return "Anonymous Donor"
        return self.donor_name


class DonationImpact(BaseModel):
    """Illustrative impact figures shown on the donation receipt."""

    training_hours: int = Field(..., ge=0)
    materials_provided: int = Field(..., ge=0)
    artisans_supported: int = Field(..., ge=0)

    model_config = {"frozen": True}
