"""Donation Allocation Reporter: transparency breakdown of a donation

Splits a donation into four fixed buckets, then splits the artisan-support
bucket across the beneficiary organizations:

    bucket_i      = round2(amount * pct_i / 100)        pct = 70/15/10/5
    artisan      += amount - sum(bucket_i)              (reconciliation)
    beneficiary_j = round2(artisan * pct_j / 100)       pct = 30/25/25/20
    largest_j    += artisan - sum(beneficiary_j)        (reconciliation)

Reconciliation is mandatory: displayed amounts always sum exactly to what
the donor gave. Rounding residue goes to the largest share at each level.

Pure and deterministic: the same amount always yields an identical
breakdown.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Final, Optional

from cordiweave.core.domain.donation import (
    AllocationBucket,
    BeneficiaryId,
    BeneficiarySubAllocation,
    DonationAllocation,
    DonationBreakdown,
)
from cordiweave.core.errors import InvalidAmountError
from cordiweave.core.math.apportion import apportion, validate_percentages
from cordiweave.core.math.money import MoneyInput, validate_positive_money
from cordiweave.donations.beneficiaries import DEFAULT_BENEFICIARY_PERCENTAGES


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_BUCKET_PERCENTAGES: Final[tuple[tuple[AllocationBucket, int], ...]] = (
    (AllocationBucket.ARTISAN_SUPPORT, 70),
    (AllocationBucket.MATERIALS, 15),
    (AllocationBucket.TRAINING, 10),
    (AllocationBucket.PLATFORM_FEE, 5),
)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class AllocationConfig:
    """Percentage tables of the allocation.

    Both tables must hold positive int percentages summing to 100, and the
    bucket table must contain ARTISAN_SUPPORT exactly once (the beneficiaries
    split that bucket).
    """

    bucket_percentages: tuple[tuple[AllocationBucket, int], ...] = DEFAULT_BUCKET_PERCENTAGES
    beneficiary_percentages: tuple[tuple[BeneficiaryId, int], ...] = DEFAULT_BENEFICIARY_PERCENTAGES

    def __post_init__(self):
        validate_percentages([pct for _, pct in self.bucket_percentages])
        validate_percentages([pct for _, pct in self.beneficiary_percentages])

        buckets = [bucket for bucket, _ in self.bucket_percentages]
        if len(set(buckets)) != len(buckets):
            raise ValueError("Bucket table contains duplicate buckets")
        if buckets.count(AllocationBucket.ARTISAN_SUPPORT) != 1:
            raise ValueError("Bucket table must contain artisan_support exactly once")

        beneficiary_ids = [bid for bid, _ in self.beneficiary_percentages]
        if len(set(beneficiary_ids)) != len(beneficiary_ids):
            raise ValueError("Beneficiary table contains duplicate ids")


# =============================================================================
# REPORTER
# =============================================================================


def parse_donation_amount(value: MoneyInput) -> Decimal:
    """Validated donation amount.

    Raises:
        InvalidAmountError: Non-positive, malformed, non-finite, float, or more
            than 2 fraction digits
    """
    try:
        return validate_positive_money(value)
    except (TypeError, ValueError) as exc:
        raise InvalidAmountError(f"Invalid donation amount {value!r}: {exc}") from exc


class DonationAllocationReporter:
    """Reconciled transparency breakdown of donations."""

    def __init__(
        self,
        config: Optional[AllocationConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config or AllocationConfig()
        self._logger = logger if logger is not None else logging.getLogger(__name__)

    def allocate(self, donation_amount: MoneyInput) -> DonationBreakdown:
        """
        Split a donation into buckets and beneficiary shares.

        Args:
            donation_amount: Positive amount with at most 2 fraction digits

        Returns:
            DonationBreakdown whose bucket amounts sum to donation_amount and
            whose beneficiary amounts sum to the artisan_support amount

        Raises:
            InvalidAmountError: If donation_amount is not a valid positive amount
                or is too large to split exactly
        """
        try:
            amount = parse_donation_amount(donation_amount)
            return self._split(amount)
        except InvalidAmountError as exc:
            self._logger.info("Allocation rejected (%s): %s", exc.error_code, exc.message)
            raise

    def _split(self, amount: Decimal) -> DonationBreakdown:
        try:
            return self._reconciled_breakdown(amount)
        except ValueError as exc:
            # Amounts near the decimal context precision cannot be split exactly
            raise InvalidAmountError(f"Donation amount {amount} is out of range") from exc

    def _reconciled_breakdown(self, amount: Decimal) -> DonationBreakdown:
        bucket_split = apportion(amount, [pct for _, pct in self.config.bucket_percentages])
        buckets = tuple(
            DonationAllocation(bucket=bucket, amount=share, percentage=pct)
            for (bucket, pct), share in zip(self.config.bucket_percentages, bucket_split.amounts)
        )

        artisan_amount = next(
            b.amount for b in buckets if b.bucket == AllocationBucket.ARTISAN_SUPPORT
        )
        beneficiary_split = apportion(
            artisan_amount, [pct for _, pct in self.config.beneficiary_percentages]
        )
        beneficiaries = tuple(
            BeneficiarySubAllocation(beneficiary_id=bid, amount=share, percentage=pct)
            for (bid, pct), share in zip(
                self.config.beneficiary_percentages, beneficiary_split.amounts
            )
        )

        if bucket_split.residual or beneficiary_split.residual:
            self._logger.debug(
                "Reconciled donation %s: bucket residual %s, beneficiary residual %s",
                amount, bucket_split.residual, beneficiary_split.residual,
            )

        return DonationBreakdown(
            donation_amount=amount,
            buckets=buckets,
            beneficiaries=beneficiaries,
        )


# =============================================================================
# CONVENIENCE
# =============================================================================

_DEFAULT_REPORTER = DonationAllocationReporter()


def allocate(donation_amount: MoneyInput) -> DonationBreakdown:
    """Allocation with the default 70/15/10/5 and 30/25/25/20 tables."""
    return _DEFAULT_REPORTER.allocate(donation_amount)
