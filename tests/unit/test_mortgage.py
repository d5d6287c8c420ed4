"""Unit tests for mortgage amortization and overpayment comparison"""

import pytest
from datetime import date, timedelta
from barefoot_budget.domain.models import MAX_FORTNIGHTS, DebtType, MortgageOutcome, PaymentFrequency
from barefoot_budget.domain.mortgage import (
    extra_available_after,
    simulate_mortgage,
    simulate_mortgage_overpayment_plan,
)
from barefoot_budget.domain.exceptions import ValidationError


START = date(2025, 1, 6)


def mortgage(debt_factory, balance_cents, rate=0.0, minimum_cents=10000, frequency=PaymentFrequency.FORTNIGHTLY):
    return debt_factory(
        "home",
        balance_cents,
        name="Home Loan",
        debt_type=DebtType.MORTGAGE,
        interest_rate=rate,
        minimum_cents=minimum_cents,
        frequency=frequency,
        priority=5,
    )


class TestSimulateMortgage:
    """Single-trajectory amortization"""

    def test_zero_interest_payoff(self):
        result = simulate_mortgage(100000, 0.0, 10000, start_date=START)

        assert len(result.timeline) == 10
        assert result.outcome == MortgageOutcome.PAID_OFF
        assert result.total_interest_cents == 0
        assert result.timeline[0].date_iso == "2025-01-06"
        assert result.timeline[0].remaining_cents == 90000
        assert result.payoff_date_iso == (START + timedelta(days=126)).isoformat()
        assert result.timeline[-1].remaining_cents == 0

    def test_period_dates_step_by_fourteen_days(self):
        result = simulate_mortgage(50000, 0.0, 10000, start_date=START)

        dates = [point.date_iso for point in result.timeline]
        assert dates == ["2025-01-06", "2025-01-20", "2025-02-03", "2025-02-17", "2025-03-03"]
        assert [point.period_index for point in result.timeline] == [0, 1, 2, 3, 4]

    def test_stalled_when_payment_does_not_cover_interest(self):
        """$10k at 10% accrues 3846 cents a fortnight; a $10 minimum never catches up"""
        result = simulate_mortgage(1000000, 0.10, 1000, start_date=START)

        assert result.outcome == MortgageOutcome.STALLED
        assert len(result.timeline) == 1
        assert result.timeline[0].remaining_cents == 1000000 + 3846 - 1000
        assert result.total_interest_cents == 3846

    def test_capped_when_payoff_exceeds_fifty_years(self):
        """Payment barely above interest: balance shrinks, but not within the cap"""
        result = simulate_mortgage(1000000, 0.026, 1001, start_date=START)

        assert result.outcome == MortgageOutcome.CAPPED
        assert len(result.timeline) == MAX_FORTNIGHTS
        assert 0 < result.timeline[-1].remaining_cents < 1000000

    def test_extra_starts_at_offset(self):
        result = simulate_mortgage(100000, 0.0, 10000, extra_cents=4000, extra_start_period=4, start_date=START)

        remaining = [point.remaining_cents for point in result.timeline]
        assert remaining == [90000, 80000, 70000, 60000, 46000, 32000, 18000, 4000, 0]

    def test_extra_never_applied_when_offset_is_none(self):
        with_none = simulate_mortgage(100000, 0.0, 10000, extra_cents=4000, extra_start_period=None, start_date=START)

        assert len(with_none.timeline) == 10

    def test_zero_balance_has_empty_timeline(self):
        result = simulate_mortgage(0, 0.05, 10000, start_date=START)

        assert result.timeline == []
        assert result.payoff_date_iso is None
        assert result.outcome == MortgageOutcome.PAID_OFF

    def test_start_date_defaults_to_today(self):
        result = simulate_mortgage(10000, 0.0, 10000)

        assert result.timeline[0].date_iso == date.today().isoformat()


class TestExtraAvailableAfter:
    """When the Fire Extinguisher is free to hit the mortgage"""

    def test_no_other_debts_means_immediately(self):
        assert extra_available_after([], 5000) == 0

    def test_zero_extra_means_immediately(self, debt_factory):
        assert extra_available_after([debt_factory("card", 20000, minimum_cents=1000)], 0) == 0

    def test_after_snowball_clears_cards(self, debt_factory):
        card = debt_factory("card", 20000, minimum_cents=1000)
        assert extra_available_after([card], 4000) == 4

    def test_never_when_cards_never_clear(self, debt_factory):
        card = debt_factory("card", 100000, interest_rate=0.36)
        assert extra_available_after([card], 1) is None


class TestOverpaymentPlan:
    """Baseline vs. with-extra comparison"""

    def test_immediate_extra_halves_zero_interest_loan(self, debt_factory):
        plan = simulate_mortgage_overpayment_plan(
            mortgage(debt_factory, 100000), [], 10000, start_date=START
        )

        assert len(plan.baseline.timeline) == 10
        assert len(plan.with_extra.timeline) == 5
        assert plan.time_saved_fortnights == 5
        assert plan.interest_saved_cents == 0
        assert plan.extra_available_after_fortnights == 0
        assert plan.payoff_date_baseline_iso == (START + timedelta(days=126)).isoformat()
        assert plan.payoff_date_with_extra_iso == (START + timedelta(days=56)).isoformat()

    def test_extra_delayed_until_cards_cleared(self, debt_factory):
        card = debt_factory("card", 20000, minimum_cents=1000)

        plan = simulate_mortgage_overpayment_plan(
            mortgage(debt_factory, 100000), [card], 4000, start_date=START
        )

        assert plan.extra_available_after_fortnights == 4
        assert len(plan.with_extra.timeline) == 9
        assert plan.time_saved_fortnights == 1

    def test_extra_never_available(self, debt_factory):
        card = debt_factory("card", 100000, interest_rate=0.36)

        plan = simulate_mortgage_overpayment_plan(
            mortgage(debt_factory, 100000), [card], 1, start_date=START
        )

        assert plan.extra_available_after_fortnights is None
        assert plan.baseline == plan.with_extra
        assert plan.time_saved_fortnights == 0
        assert plan.interest_saved_cents == 0

    def test_interest_saved_with_real_rate(self, debt_factory):
        plan = simulate_mortgage_overpayment_plan(
            mortgage(debt_factory, 1000000, rate=0.05), [], 10000, start_date=START
        )

        assert plan.interest_saved_cents > 0
        assert plan.time_saved_fortnights > 0
        assert plan.baseline.total_interest_cents > plan.with_extra.total_interest_cents

    def test_monthly_minimum_uses_mortgage_frequency(self, debt_factory):
        """$260/month normalizes to $120/fortnight"""
        monthly = mortgage(debt_factory, 120000, minimum_cents=26000, frequency=PaymentFrequency.MONTHLY)

        plan = simulate_mortgage_overpayment_plan(monthly, [], 0, start_date=START)

        assert len(plan.baseline.timeline) == 10
        assert plan.baseline.timeline[0].remaining_cents == 108000

    def test_zero_extra_saves_nothing(self, home_loan):
        plan = simulate_mortgage_overpayment_plan(home_loan, [], 0, start_date=START)

        assert plan.baseline == plan.with_extra
        assert plan.time_saved_fortnights == 0
        assert plan.interest_saved_cents == 0

    def test_no_mortgage_returns_empty_plan(self):
        plan = simulate_mortgage_overpayment_plan(None, [], 5000)

        assert plan.baseline.timeline == []
        assert plan.with_extra.timeline == []
        assert plan.payoff_date_baseline_iso is None
        assert plan.payoff_date_with_extra_iso is None
        assert plan.time_saved_fortnights == 0
        assert plan.interest_saved_cents == 0

    def test_paid_off_mortgage_has_no_payoff_dates(self, debt_factory):
        plan = simulate_mortgage_overpayment_plan(mortgage(debt_factory, 0), [], 5000, start_date=START)

        assert plan.payoff_date_baseline_iso is None
        assert plan.payoff_date_with_extra_iso is None

    def test_negative_extra_rejected(self, home_loan):
        with pytest.raises(ValidationError):
            simulate_mortgage_overpayment_plan(home_loan, [], -1)
