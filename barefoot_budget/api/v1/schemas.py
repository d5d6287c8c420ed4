"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional

from barefoot_budget.domain.buckets import BarefootBucket
from barefoot_budget.domain.models import DebtType, PaymentFrequency


class DebtCreateRequest(BaseModel):
    """Request body for POST /v1/debts"""

    user_id: str = Field(..., min_length=1, description="User identifier")
    name: str = Field(..., min_length=1, max_length=255)
    debt_type: DebtType
    original_amount_cents: int = Field(..., ge=0)
    current_balance_cents: int = Field(..., ge=0)
    interest_rate: float = Field(..., ge=0, description="Annual rate as decimal, e.g. 0.1999")
    minimum_payment_cents: int = Field(..., ge=0)
    min_payment_frequency: PaymentFrequency = PaymentFrequency.FORTNIGHTLY
    priority: Optional[int] = Field(None, ge=0, description="Lower pays first; defaults by debt type")


class DebtUpdateRequest(BaseModel):
    """Request body for PATCH /v1/debts/{debt_id}; omitted fields keep their stored value"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    debt_type: Optional[DebtType] = None
    original_amount_cents: Optional[int] = Field(None, ge=0)
    current_balance_cents: Optional[int] = Field(None, ge=0)
    interest_rate: Optional[float] = Field(None, ge=0)
    minimum_payment_cents: Optional[int] = Field(None, ge=0)
    min_payment_frequency: Optional[PaymentFrequency] = None
    priority: Optional[int] = Field(None, ge=0)


class MortgageUpsertRequest(BaseModel):
    """Request body for PUT /v1/mortgage"""

    user_id: str = Field(..., min_length=1)
    name: str = Field("Home Mortgage", min_length=1, max_length=255)
    original_principal_cents: int = Field(..., ge=0)
    current_principal_cents: int = Field(..., ge=0)
    annual_rate_bps: int = Field(..., ge=0, le=10000, description="Annual rate in basis points")
    min_payment_cents: int = Field(..., ge=0)
    min_payment_frequency: PaymentFrequency = PaymentFrequency.FORTNIGHTLY
    priority: int = Field(5, ge=5)


class DebtResponse(BaseModel):
    id: str
    name: str
    debt_type: DebtType
    original_amount_cents: int
    current_balance_cents: int
    interest_rate: float
    minimum_payment_cents: int
    min_payment_frequency: PaymentFrequency
    priority: int


class DebtListResponse(BaseModel):
    user_id: str
    debts: List[DebtResponse]


class DebtSummary(BaseModel):
    id: str
    name: str
    debt_type: DebtType


class MinimumPaymentItem(BaseModel):
    """Minimum paid on a debt that is not the snowball target"""

    debt_id: str
    debt_name: str
    minimum_payment_cents: int
    remaining_balance_cents: int


class FortnightlyTimelineEntry(BaseModel):
    """Single fortnight in the debt payoff timeline"""

    fortnight: int
    payment_date: str  # YYYY-MM-DD
    debt_being_paid: Optional[DebtSummary] = None
    payment_to_active_debt_cents: int
    remaining_balance_of_active_debt_cents: int
    minimum_payments_on_other_debts: List[MinimumPaymentItem]
    total_debt_remaining_cents: int
    debts_paid_off_this_fortnight: List[DebtSummary]
    interest_cents: int


class DebtPayoffPlanResponse(BaseModel):
    """Response for GET /v1/payoff-plan"""

    total_fortnights_to_payoff: int
    converged: bool
    total_interest_cents: int
    fortnightly_fire_extinguisher_cents: int
    timeline: List[FortnightlyTimelineEntry]


class MortgageTimelinePointSchema(BaseModel):
    period_index: int
    date_iso: str
    remaining_cents: int


class MortgageOverpaymentResponse(BaseModel):
    """Response for GET /v1/mortgage/overpayment-plan"""

    baseline: List[MortgageTimelinePointSchema]
    with_extra: List[MortgageTimelinePointSchema]
    payoff_date_baseline_iso: Optional[str] = None
    payoff_date_with_extra_iso: Optional[str] = None
    time_saved_fortnights: int
    interest_saved_cents: int
    baseline_total_interest_cents: int
    with_extra_total_interest_cents: int
    extra_available_after_fortnights: Optional[int] = None


class BucketAllocationRequest(BaseModel):
    """Request body for POST /v1/buckets/allocation"""

    fortnightly_income_cents: int = Field(..., ge=0)
    allocation_bps: Optional[Dict[BarefootBucket, int]] = Field(
        None, description="Basis points per bucket; defaults to 60/10/10/20"
    )


class BucketAllocationResponse(BaseModel):
    fortnightly_income_cents: int
    buckets: Dict[BarefootBucket, int]
    fire_extinguisher_cents: int
