"""Beneficiary organizations of the artisan-support bucket.

Static reference data. The receipt shows these four organizations with the
share of the artisan-support bucket each receives (30/25/25/20), which is
21/17.5/17.5/14 percent of the whole donation.
"""

from typing import Iterable, Optional

from cordiweave.core.domain.donation import Beneficiary, BeneficiaryId

DEFAULT_BENEFICIARIES: tuple[Beneficiary, ...] = (
    Beneficiary(
        id=1,
        name="Bahay Aruga - Orphanage",
        description="Provides care and education for orphaned children in the Cordillera region",
        location="Baguio City, Philippines",
        established="2015",
    ),
    Beneficiary(
        id=2,
        name="Weavers Education Center",
        description="Provides free training in traditional weaving for youth",
        location="Sagada, Mountain Province",
        established="2018",
    ),
    Beneficiary(
        id=3,
        name="Elderly Care Foundation",
        description="Support for elderly artisans who can no longer work",
        location="Bontoc, Mountain Province",
        established="2020",
    ),
    Beneficiary(
        id=4,
        name="Community Development Center",
        description="Promotes sustainable livelihood programs for communities",
        location="Kalinga Province",
        established="2016",
    ),
)

# Share of the artisan-support bucket, in the order of DEFAULT_BENEFICIARIES
DEFAULT_BENEFICIARY_PERCENTAGES: tuple[tuple[BeneficiaryId, int], ...] = (
    (1, 30),
    (2, 25),
    (3, 25),
    (4, 20),
)


class BeneficiaryRegistry:
    """Lookup of beneficiary records by id."""

    def __init__(self, beneficiaries: Iterable[Beneficiary] = DEFAULT_BENEFICIARIES):
        self._by_id: dict[BeneficiaryId, Beneficiary] = {}
        for beneficiary in beneficiaries:
            if beneficiary.id in self._by_id:
                raise ValueError(f"Duplicate beneficiary id: {beneficiary.id!r}")
            self._by_id[beneficiary.id] = beneficiary

    def get(self, beneficiary_id: BeneficiaryId) -> Optional[Beneficiary]:
        return self._by_id.get(beneficiary_id)

    def all(self) -> list[Beneficiary]:
        return list(self._by_id.values())

    def __contains__(self, beneficiary_id: BeneficiaryId) -> bool:
        return beneficiary_id in self._by_id
