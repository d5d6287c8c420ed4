"""Mortgage overpayment simulation - baseline vs. Fire Extinguisher overpayments"""

from datetime import date
from typing import List, Optional

from barefoot_budget.domain.exceptions import ValidationError
from barefoot_budget.domain.models import (
    MAX_FORTNIGHTS,
    Debt,
    MortgageOutcome,
    MortgageOverpaymentPlan,
    MortgageSimulationResult,
    MortgageTimelinePoint,
)
from barefoot_budget.domain.money import Money
from barefoot_budget.domain.snowball import (
    calculate_snowball_fortnightly,
    fortnightly_interest_cents,
    to_fortnightly_cents,
)
from barefoot_budget.utils.date_utils import fortnight_iso


def simulate_mortgage(
    starting_balance_cents: int,
    annual_rate: float,
    fortnightly_minimum_cents: int,
    extra_cents: int = 0,
    extra_start_period: Optional[int] = 0,
    start_date: date | None = None,
) -> MortgageSimulationResult:
    """
    Amortize a single mortgage balance fortnight by fortnight.

    Per period i (0-based): accrue interest, pay the minimum plus `extra_cents`
    once i >= extra_start_period (never when extra_start_period is None), cap
    the payment at the balance, record a point dated start_date + i * 14 days.

    Terminal states:
    - PAID_OFF: balance reached 0
    - CAPPED: MAX_FORTNIGHTS periods simulated
    - STALLED: payment did not exceed the interest accrued; the timeline ends at
      the stalled period with a positive remaining balance
    """
    if start_date is None:
        start_date = date.today()

    balance = starting_balance_cents
    total_interest_cents = 0
    timeline: List[MortgageTimelinePoint] = []
    outcome = MortgageOutcome.PAID_OFF

    for period_index in range(MAX_FORTNIGHTS):
        if balance <= 0:
            break

        interest = fortnightly_interest_cents(balance, annual_rate)
        balance += interest
        total_interest_cents += interest

        extra = 0
        if extra_start_period is not None and period_index >= extra_start_period:
            extra = extra_cents
        payment = max(0, fortnightly_minimum_cents + extra)
        actual_payment = min(payment, balance)
        balance -= actual_payment

        timeline.append(
            MortgageTimelinePoint(
                period_index=period_index,
                date_iso=fortnight_iso(start_date, period_index),
                remaining_cents=max(0, balance),
            )
        )

        if actual_payment <= interest and balance > 0:
            outcome = MortgageOutcome.STALLED
            break
    else:
        if balance > 0:
            outcome = MortgageOutcome.CAPPED

    return MortgageSimulationResult(
        timeline=timeline,
        total_interest_cents=total_interest_cents,
        outcome=outcome,
    )


def extra_available_after(non_mortgage_debts: List[Debt], fortnightly_extra_cents: int) -> Optional[int]:
    """
    Number of fortnights before the extra payment is free for the mortgage.

    The extra first snowballs the non-mortgage debts; it reaches the mortgage
    once they are cleared. Returns None if they never clear.
    """
    if not non_mortgage_debts or fortnightly_extra_cents <= 0:
        return 0

    plan = calculate_snowball_fortnightly(non_mortgage_debts, Money(fortnightly_extra_cents))
    if not plan.converged:
        return None
    return plan.fortnights


def simulate_mortgage_overpayment_plan(
    mortgage: Optional[Debt],
    non_mortgage_debts: List[Debt],
    fortnightly_extra_cents: int,
    start_date: date | None = None,
) -> MortgageOverpaymentPlan:
    """
    Compare minimum-only mortgage payoff against paying the Fire Extinguisher on top.

    Both trajectories run through simulate_mortgage with identical mechanics;
    only the extra payment and its start period differ.

    Savings are clamped at zero.
    """
    if fortnightly_extra_cents < 0:
        raise ValidationError("Fortnightly extra payment cannot be negative")

    if mortgage is None:
        return MortgageOverpaymentPlan(
            baseline=MortgageSimulationResult(timeline=[], total_interest_cents=0),
            with_extra=MortgageSimulationResult(timeline=[], total_interest_cents=0),
            payoff_date_baseline_iso=None,
            payoff_date_with_extra_iso=None,
            time_saved_fortnights=0,
            interest_saved_cents=0,
            extra_available_after_fortnights=0,
        )

    if start_date is None:
        start_date = date.today()

    offset = extra_available_after(non_mortgage_debts, fortnightly_extra_cents)
    minimum_cents = to_fortnightly_cents(mortgage)

    baseline = simulate_mortgage(
        mortgage.current_balance.cents,
        mortgage.interest_rate,
        minimum_cents,
        start_date=start_date,
    )
    with_extra = simulate_mortgage(
        mortgage.current_balance.cents,
        mortgage.interest_rate,
        minimum_cents,
        extra_cents=fortnightly_extra_cents,
        extra_start_period=offset,
        start_date=start_date,
    )

    return MortgageOverpaymentPlan(
        baseline=baseline,
        with_extra=with_extra,
        payoff_date_baseline_iso=baseline.payoff_date_iso,
        payoff_date_with_extra_iso=with_extra.payoff_date_iso,
        time_saved_fortnights=max(0, len(baseline.timeline) - len(with_extra.timeline)),
        interest_saved_cents=max(0, baseline.total_interest_cents - with_extra.total_interest_cents),
        extra_available_after_fortnights=offset,
    )
