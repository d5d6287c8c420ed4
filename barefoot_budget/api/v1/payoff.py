"""GET /v1/payoff-plan - Barefoot snowball debt payoff timeline"""

import time
import logging
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from barefoot_budget.api.v1.schemas import (
    DebtPayoffPlanResponse,
    DebtSummary,
    FortnightlyTimelineEntry,
    MinimumPaymentItem,
)
from barefoot_budget.api.dependencies import get_income_fire_extinguisher_cents, get_request_id, resolve_extra_cents
from barefoot_budget.config import settings
from barefoot_budget.infrastructure.database.session import get_db
from barefoot_budget.infrastructure.database.repositories import DebtRepository
from barefoot_budget.infrastructure.observability.metrics import record_snowball_plan
from barefoot_budget.infrastructure.observability.logging import log_payoff_plan
from barefoot_budget.domain.models import Debt, SnowballPeriod, SnowballPlan
from barefoot_budget.domain.money import Money
from barefoot_budget.domain.snowball import calculate_snowball_fortnightly, to_fortnightly_cents
from barefoot_budget.domain.exceptions import ValidationError
from barefoot_budget.utils.date_utils import generate_fortnight_dates

router = APIRouter()


def _summary(debt: Debt) -> DebtSummary:
    return DebtSummary(id=debt.id, name=debt.name, debt_type=debt.debt_type)


def build_timeline_entry(period: SnowballPeriod, payment_date: date) -> FortnightlyTimelineEntry:
    """Map one simulated fortnight to its presentation form"""
    active = period.active_debt
    balances = period.remaining_balances

    others = [
        MinimumPaymentItem(
            debt_id=d.id,
            debt_name=d.name,
            minimum_payment_cents=to_fortnightly_cents(d),
            remaining_balance_cents=balances.get(d.id, 0),
        )
        for d in period.debts_continuing
        if d.id != active.id
    ]

    return FortnightlyTimelineEntry(
        fortnight=period.fortnight,
        payment_date=payment_date.isoformat(),
        debt_being_paid=_summary(active),
        payment_to_active_debt_cents=period.payments_this_period.get(active.id, 0),
        remaining_balance_of_active_debt_cents=balances.get(active.id, 0),
        minimum_payments_on_other_debts=others,
        total_debt_remaining_cents=sum(balances.get(d.id, 0) for d in period.debts_continuing),
        debts_paid_off_this_fortnight=[_summary(d) for d in period.debts_paid],
        interest_cents=period.interest_this_period.cents,
    )


def build_payoff_plan_response(
    plan: SnowballPlan,
    fortnightly_fire_extinguisher_cents: int,
    start_date: date,
) -> DebtPayoffPlanResponse:
    timeline: List[FortnightlyTimelineEntry] = [
        build_timeline_entry(period, payment_date)
        for period, payment_date in zip(plan.timeline, generate_fortnight_dates(start_date, len(plan.timeline)))
    ]
    return DebtPayoffPlanResponse(
        total_fortnights_to_payoff=plan.fortnights,
        converged=plan.converged,
        total_interest_cents=plan.total_interest.cents,
        fortnightly_fire_extinguisher_cents=fortnightly_fire_extinguisher_cents,
        timeline=timeline,
    )


@router.get("/payoff-plan", response_model=DebtPayoffPlanResponse)
def get_payoff_plan(
    request: Request,
    user_id: str = Query(..., description="User identifier"),
    fortnightly_fire_extinguisher_cents: Optional[int] = Query(None, ge=0, description="Extra paid each fortnight"),
    income_fire_extinguisher_cents: Optional[int] = Depends(get_income_fire_extinguisher_cents),
    start_date: Optional[date] = Query(None, description="First payment date, defaults to today"),
    db: Session = Depends(get_db),
):
    """
    Project a fortnight-by-fortnight snowball payoff of all the user's debts.

    Flow:
    1. Load debts in snowball order
    2. Simulate with the Fire Extinguisher amount as the extra payment, given
       directly in cents or derived from fortnightly_income_cents and bps
    3. Date each fortnight from start_date and map to the response

    A plan with converged=false hit the 1300-fortnight cap: payments never
    outpace interest.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    extra_cents = resolve_extra_cents(fortnightly_fire_extinguisher_cents, income_fire_extinguisher_cents)
    if start_date is None:
        start_date = date.today()

    debts = DebtRepository(db).find_by_priority(user_id)

    try:
        plan = calculate_snowball_fortnightly(
            debts, Money(extra_cents, settings.currency)
        )
    except ValidationError as e:
        logging.warning(f"Invalid payoff request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    duration_ms = (time.time() - start_time) * 1000
    record_snowball_plan(plan)
    log_payoff_plan(
        request_id,
        user_id,
        len(debts),
        plan.fortnights,
        plan.converged,
        plan.total_interest.cents,
        duration_ms,
    )

    return build_payoff_plan_response(plan, extra_cents, start_date)
