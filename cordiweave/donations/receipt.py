"""Donation receipt: data behind the receipt shown after payment.

A receipt is assembled only for donations the payment-provider webhook has
marked completed. It carries the reconciled breakdown, the beneficiary
records and a few illustrative impact figures.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Final, Iterable, Optional, Protocol, Union

from pydantic import BaseModel

from cordiweave.core.domain.donation import (
    Beneficiary,
    DonationBreakdown,
    DonationImpact,
    DonationRecord,
)
from cordiweave.core.errors import DonationNotCompletedError
from cordiweave.donations.allocation import DonationAllocationReporter
from cordiweave.donations.beneficiaries import BeneficiaryRegistry

DonationId = Union[int, str]

# Pesos per unit of impact
PESOS_PER_TRAINING_HOUR: Final[Decimal] = Decimal(500)
PESOS_PER_MATERIAL: Final[Decimal] = Decimal(1000)
PESOS_PER_ARTISAN: Final[Decimal] = Decimal(2000)


class DonationRepository(Protocol):
    """Read access to persisted donations."""

    def get(self, donation_id: DonationId) -> Optional[DonationRecord]: ...


class InMemoryDonationRepository:
    def __init__(self, donations: Iterable[DonationRecord] = ()):
        self._donations: dict[DonationId, DonationRecord] = {d.id: d for d in donations}

    def add(self, donation: DonationRecord) -> None:
        self._donations[donation.id] = donation

    def get(self, donation_id: DonationId) -> Optional[DonationRecord]:
        return self._donations.get(donation_id)


def _units(amount: Decimal, per_unit: Decimal) -> int:
    return int((amount / per_unit).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def compute_impact(amount: Decimal) -> DonationImpact:
    """
    Impact figures: amount / 500, / 1000, / 2000, rounded half-up.

    Examples:
        >>> compute_impact(Decimal("2500.00"))
        DonationImpact(training_hours=5, materials_provided=3, artisans_supported=1)
    """
    return DonationImpact(
        training_hours=_units(amount, PESOS_PER_TRAINING_HOUR),
        materials_provided=_units(amount, PESOS_PER_MATERIAL),
        artisans_supported=_units(amount, PESOS_PER_ARTISAN),
    )


class DonationReceipt(BaseModel):
    donation: DonationRecord
    breakdown: DonationBreakdown
    impact: DonationImpact
    beneficiaries: tuple[Beneficiary, ...]

    model_config = {"frozen": True}

    def to_payload(self) -> dict[str, Any]:
        return {
            "donation_id": self.donation.id,
            "donor": self.donation.donor_display_name(),
            "campaign_id": self.donation.campaign_id,
            "status": self.donation.status.value,
            "allocation": self.breakdown.to_payload(),
            "impact": self.impact.model_dump(),
            "beneficiaries": [b.model_dump() for b in self.beneficiaries],
        }


def build_receipt(
    donation: DonationRecord,
    reporter: Optional[DonationAllocationReporter] = None,
    registry: Optional[BeneficiaryRegistry] = None,
) -> DonationReceipt:
    """
    Receipt for a completed donation.

    Raises:
        DonationNotCompletedError: If the donation status is not completed
        InvalidAmountError: If the stored amount is not a valid donation amount
        ValueError: If a beneficiary of the allocation is missing from the registry
    """
    if not donation.is_completed():
        raise DonationNotCompletedError(donation.id, donation.status.value)

    reporter = reporter or DonationAllocationReporter()
    registry = registry or BeneficiaryRegistry()

    breakdown = reporter.allocate(donation.amount)

    beneficiaries = []
    for share in breakdown.beneficiaries:
        record = registry.get(share.beneficiary_id)
        if record is None:
            raise ValueError(f"Beneficiary {share.beneficiary_id!r} is not registered")
        beneficiaries.append(record)

    return DonationReceipt(
        donation=donation,
        breakdown=breakdown,
        impact=compute_impact(breakdown.donation_amount),
        beneficiaries=tuple(beneficiaries),
    )
