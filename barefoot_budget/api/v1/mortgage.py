"""/v1/mortgage - mortgage upsert, lookup and overpayment projection"""

import time
import uuid
import logging
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from barefoot_budget.api.v1.debts import debt_to_response
from barefoot_budget.api.v1.schemas import (
    DebtResponse,
    MortgageOverpaymentResponse,
    MortgageTimelinePointSchema,
    MortgageUpsertRequest,
)
from barefoot_budget.api.dependencies import get_income_fire_extinguisher_cents, get_request_id, resolve_extra_cents
from barefoot_budget.config import settings
from barefoot_budget.infrastructure.database.session import get_db
from barefoot_budget.infrastructure.database.repositories import DebtRepository
from barefoot_budget.infrastructure.observability.metrics import debt_mutation_counter, record_mortgage_plan
from barefoot_budget.infrastructure.observability.logging import log_mortgage_plan
from barefoot_budget.domain.buckets import BPS_DENOMINATOR
from barefoot_budget.domain.models import Debt, DebtType, MortgageTimelinePoint
from barefoot_budget.domain.money import Money
from barefoot_budget.domain.mortgage import simulate_mortgage_overpayment_plan
from barefoot_budget.domain.exceptions import ValidationError

router = APIRouter()


def _points(timeline: List[MortgageTimelinePoint]) -> List[MortgageTimelinePointSchema]:
    return [
        MortgageTimelinePointSchema(
            period_index=p.period_index,
            date_iso=p.date_iso,
            remaining_cents=p.remaining_cents,
        )
        for p in timeline
    ]


@router.put("/mortgage", response_model=DebtResponse)
def upsert_mortgage(
    request_body: MortgageUpsertRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """Create or replace the user's single mortgage. Rate arrives in basis points."""
    request_id = get_request_id(request)

    try:
        mortgage = Debt(
            id=str(uuid.uuid4()),
            name=request_body.name,
            debt_type=DebtType.MORTGAGE,
            original_amount=Money(request_body.original_principal_cents, settings.currency),
            current_balance=Money(request_body.current_principal_cents, settings.currency),
            interest_rate=request_body.annual_rate_bps / BPS_DENOMINATOR,
            minimum_payment=Money(request_body.min_payment_cents, settings.currency),
            min_payment_frequency=request_body.min_payment_frequency,
            priority=request_body.priority,
        )
        saved = DebtRepository(db).upsert_mortgage(request_body.user_id, mortgage)
        db.commit()

    except ValidationError as e:
        db.rollback()
        logging.warning(f"Invalid mortgage: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    debt_mutation_counter.labels(operation="upsert_mortgage").inc()
    return debt_to_response(saved)


@router.get("/mortgage", response_model=DebtResponse)
def get_mortgage(
    user_id: str = Query(..., description="User identifier"),
    db: Session = Depends(get_db),
):
    mortgages = DebtRepository(db).find_by_type(user_id, DebtType.MORTGAGE)
    if not mortgages:
        raise HTTPException(status_code=404, detail="Mortgage not found")

    return debt_to_response(mortgages[0])


@router.get("/mortgage/overpayment-plan", response_model=MortgageOverpaymentResponse)
def get_mortgage_overpayment_plan(
    request: Request,
    user_id: str = Query(..., description="User identifier"),
    fortnightly_extra_cents: Optional[int] = Query(None, ge=0, description="Fire Extinguisher amount per fortnight"),
    income_fire_extinguisher_cents: Optional[int] = Depends(get_income_fire_extinguisher_cents),
    start_date: Optional[date] = Query(None, description="First period date, defaults to today"),
    db: Session = Depends(get_db),
):
    """
    Compare minimum-only mortgage payoff against adding the Fire Extinguisher.

    The extra payment first snowballs the user's other debts and only reaches
    the mortgage once they are cleared. Returns empty timelines when the user
    has no mortgage. The extra can also be derived from fortnightly_income_cents.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    extra_cents = resolve_extra_cents(fortnightly_extra_cents, income_fire_extinguisher_cents)

    repo = DebtRepository(db)
    mortgages = repo.find_by_type(user_id, DebtType.MORTGAGE)
    mortgage = mortgages[0] if mortgages else None
    non_mortgage_debts = [d for d in repo.find_by_priority(user_id) if d.debt_type != DebtType.MORTGAGE]

    try:
        plan = simulate_mortgage_overpayment_plan(
            mortgage,
            non_mortgage_debts,
            extra_cents,
            start_date=start_date,
        )
    except ValidationError as e:
        logging.warning(f"Invalid mortgage plan request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    duration_ms = (time.time() - start_time) * 1000
    record_mortgage_plan(plan)
    log_mortgage_plan(
        request_id,
        user_id,
        plan.baseline.outcome.value if mortgage else None,
        plan.with_extra.outcome.value if mortgage else None,
        plan.time_saved_fortnights,
        plan.interest_saved_cents,
        duration_ms,
    )

    return MortgageOverpaymentResponse(
        baseline=_points(plan.baseline.timeline),
        with_extra=_points(plan.with_extra.timeline),
        payoff_date_baseline_iso=plan.payoff_date_baseline_iso,
        payoff_date_with_extra_iso=plan.payoff_date_with_extra_iso,
        time_saved_fortnights=plan.time_saved_fortnights,
        interest_saved_cents=plan.interest_saved_cents,
        baseline_total_interest_cents=plan.baseline.total_interest_cents,
        with_extra_total_interest_cents=plan.with_extra.total_interest_cents,
        extra_available_after_fortnights=plan.extra_available_after_fortnights,
    )
