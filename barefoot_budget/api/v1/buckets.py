"""POST /v1/buckets/allocation - split fortnightly income across Barefoot buckets"""

from fastapi import APIRouter, HTTPException

from barefoot_budget.api.v1.schemas import BucketAllocationRequest, BucketAllocationResponse
from barefoot_budget.config import settings
from barefoot_budget.domain.buckets import BarefootBucket, allocate_income
from barefoot_budget.domain.money import Money
from barefoot_budget.domain.exceptions import ValidationError

router = APIRouter()


@router.post("/buckets/allocation", response_model=BucketAllocationResponse)
def allocate(request_body: BucketAllocationRequest):
    """
    Split income by basis points (default 60/10/10/20, Mojo and Grow at 0).

    The Fire Extinguisher share is the amount to feed into the payoff and
    mortgage plans.
    """
    income = Money(request_body.fortnightly_income_cents, settings.currency)

    try:
        split = allocate_income(income, request_body.allocation_bps)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return BucketAllocationResponse(
        fortnightly_income_cents=income.cents,
        buckets={bucket: amount.cents for bucket, amount in split.items()},
        fire_extinguisher_cents=split[BarefootBucket.FIRE_EXTINGUISHER].cents,
    )
