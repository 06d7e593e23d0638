from fastapi import APIRouter, Depends, HTTPException

from cordiweave.api.dependencies import get_allocation_reporter, get_donation_repository
from cordiweave.donations.allocation import DonationAllocationReporter
from cordiweave.donations.receipt import DonationRepository, build_receipt

router = APIRouter()


@router.get("/{donation_id}/allocation")
def donation_allocation(
    donation_id: int,
    repository: DonationRepository = Depends(get_donation_repository),
    reporter: DonationAllocationReporter = Depends(get_allocation_reporter),
):
    donation = repository.get(donation_id)
    if donation is None:
        raise HTTPException(status_code=404, detail="Donation not found")

    receipt = build_receipt(donation, reporter=reporter)
    return {"success": True, "data": receipt.to_payload()}
