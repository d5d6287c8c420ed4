"""Debt snowball payoff simulation - fortnight by fortnight"""

from typing import Dict, List

from barefoot_budget.domain.exceptions import ValidationError
from barefoot_budget.domain.models import (
    MAX_FORTNIGHTS,
    Debt,
    PaymentFrequency,
    SnowballPeriod,
    SnowballPlan,
)
from barefoot_budget.domain.money import Money, round_half_up

FORTNIGHTS_PER_YEAR = 26
MONTHS_PER_YEAR = 12


def sort_debts_by_snowball_order(debts: List[Debt]) -> List[Debt]:
    """Priority ascending, then current balance ascending. Returns a new list."""
    return sorted(debts, key=lambda d: (d.priority, d.current_balance.cents))


def to_fortnightly_cents(debt: Debt) -> int:
    """
    Normalize a debt's minimum payment to a fortnightly amount.

    Monthly minimums are annualized then spread over 26 fortnights:
    $260.00/month -> 26000 * 12 / 26 = 12000 cents/fortnight.
    """
    if debt.min_payment_frequency == PaymentFrequency.MONTHLY:
        return round_half_up(debt.minimum_payment.cents * MONTHS_PER_YEAR / FORTNIGHTS_PER_YEAR)
    return debt.minimum_payment.cents


def fortnightly_interest_cents(balance_cents: int, annual_rate: float) -> int:
    """Interest accrued on a balance over one fortnight"""
    return round_half_up(balance_cents * (annual_rate / FORTNIGHTS_PER_YEAR))


def calculate_snowball_fortnightly(debts: List[Debt], extra_payment: Money) -> SnowballPlan:
    """
    Simulate Barefoot snowball payoff with fortnightly payments.

    Each fortnight:
    1. Interest accrues on every active debt (annual rate / 26)
    2. Every active debt receives its minimum (monthly minimums normalized)
    3. The active debt - first remaining in priority/balance order - also
       receives the full extra payment (Fire Extinguisher)
    4. Payments are capped at the outstanding balance, so balances never go negative
    5. Debts at zero are retired; the extra moves on to the next debt

    Freed minimums of retired debts are not reallocated to the next target.

    Stops when every debt is cleared or after MAX_FORTNIGHTS (~50 years). A plan
    with fortnights >= MAX_FORTNIGHTS did not converge (payments never outpace
    interest).

    Args:
        debts: Debt snapshots, any order. Never mutated.
        extra_payment: Fortnightly amount on top of minimums

    Returns:
        SnowballPlan with per-fortnight timeline and total interest

    Raises:
        ValidationError: If extra_payment is negative
    """
    if extra_payment.cents < 0:
        raise ValidationError("Extra payment cannot be negative")

    if not debts:
        return SnowballPlan(fortnights=0, total_interest=Money(0, extra_payment.currency), timeline=[])

    ordered = sort_debts_by_snowball_order(debts)
    minimums = {d.id: to_fortnightly_cents(d) for d in ordered}

    # Working balances owned by this call; retired debts stay at 0
    balances: Dict[str, int] = {d.id: d.current_balance.cents for d in ordered}
    active = list(ordered)

    timeline: List[SnowballPeriod] = []
    total_interest_cents = 0
    fortnight = 0

    while active and fortnight < MAX_FORTNIGHTS:
        fortnight += 1

        interest_cents = 0
        for debt in active:
            interest = fortnightly_interest_cents(balances[debt.id], debt.interest_rate)
            balances[debt.id] += interest
            interest_cents += interest
        total_interest_cents += interest_cents

        target = active[0]
        payments: Dict[str, int] = {}
        for debt in active:
            intended = minimums[debt.id]
            if debt is target:
                intended += extra_payment.cents
            payment = min(intended, balances[debt.id])
            balances[debt.id] -= payment
            payments[debt.id] = payment

        paid_off = [d for d in active if balances[d.id] <= 0]
        active = [d for d in active if balances[d.id] > 0]

        timeline.append(
            SnowballPeriod(
                fortnight=fortnight,
                active_debt=target,
                debts_continuing=list(active),
                debts_paid=paid_off,
                remaining_balances={debt_id: max(0, cents) for debt_id, cents in balances.items()},
                interest_this_period=Money(interest_cents, extra_payment.currency),
                payments_this_period=payments,
                total_paid_this_period=Money(sum(payments.values()), extra_payment.currency),
            )
        )

    return SnowballPlan(
        fortnights=fortnight,
        total_interest=Money(total_interest_cents, extra_payment.currency),
        timeline=timeline,
    )
