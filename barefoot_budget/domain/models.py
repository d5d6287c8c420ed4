"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from barefoot_budget.domain.exceptions import ValidationError
from barefoot_budget.domain.money import Money

CREDIT_CARD_MAX_RATE = 0.36
MORTGAGE_MAX_RATE = 0.10
MORTGAGE_MIN_PRIORITY = 5

# ~50 years of fortnights; simulations stop here if debts never clear
MAX_FORTNIGHTS = 1300


class DebtType(str, Enum):
    CREDIT_CARD = "credit-card"
    MORTGAGE = "mortgage"


class PaymentFrequency(str, Enum):
    FORTNIGHTLY = "FORTNIGHTLY"
    MONTHLY = "MONTHLY"


class MortgageOutcome(str, Enum):
    """How a single mortgage amortization run ended"""

    PAID_OFF = "paid_off"
    CAPPED = "capped"
    STALLED = "stalled"


@dataclass(frozen=True)
class Debt:
    """
    Read-only debt snapshot used as simulation input.

    Invariants (checked at construction):
    - name is not blank
    - 0 <= interest_rate, credit cards <= 36%, mortgages <= 10%
    - priority >= 0, mortgages >= 5 so credit cards are cleared first
    - 0 <= current_balance <= original_amount
    - minimum_payment >= 0
    """

    id: str
    name: str
    debt_type: DebtType
    original_amount: Money
    current_balance: Money
    interest_rate: float  # annual, decimal (0.1999 = 19.99%)
    minimum_payment: Money
    min_payment_frequency: PaymentFrequency = PaymentFrequency.FORTNIGHTLY
    priority: int = 1  # lower pays first

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Debt name cannot be empty")

        if self.interest_rate < 0:
            raise ValidationError("Interest rate cannot be negative")
        if self.debt_type == DebtType.CREDIT_CARD and self.interest_rate > CREDIT_CARD_MAX_RATE:
            raise ValidationError("Credit card interest rate cannot exceed 36%")
        if self.debt_type == DebtType.MORTGAGE and self.interest_rate > MORTGAGE_MAX_RATE:
            raise ValidationError("Mortgage interest rate cannot exceed 10%")

        if self.priority < 0:
            raise ValidationError("Priority cannot be negative")
        if self.debt_type == DebtType.MORTGAGE and self.priority < MORTGAGE_MIN_PRIORITY:
            raise ValidationError(
                "Mortgage priority must be >= 5 to ensure credit cards are paid first"
            )

        if self.current_balance.cents > self.original_amount.cents:
            raise ValidationError("Current balance cannot exceed original debt amount")
        if self.current_balance.cents < 0:
            raise ValidationError("Current balance cannot be negative")
        if self.minimum_payment.cents < 0:
            raise ValidationError("Minimum payment cannot be negative")


@dataclass
class SnowballPeriod:
    """One fortnight of a snowball payoff timeline"""

    fortnight: int  # 1-based
    active_debt: Debt  # received the extra payment this fortnight
    debts_continuing: List[Debt]
    debts_paid: List[Debt]
    remaining_balances: Dict[str, int]  # debt id -> cents after payment, every debt
    interest_this_period: Money
    payments_this_period: Dict[str, int] = field(default_factory=dict)
    total_paid_this_period: Money = field(default_factory=lambda: Money(0))


@dataclass
class SnowballPlan:
    """Complete snowball payoff projection"""

    fortnights: int
    total_interest: Money
    timeline: List[SnowballPeriod]
    max_fortnights: int = MAX_FORTNIGHTS

    @property
    def converged(self) -> bool:
        """False when the simulation ran into the safety cap"""
        return self.fortnights < self.max_fortnights


@dataclass
class MortgageTimelinePoint:
    period_index: int  # 0-based
    date_iso: str  # YYYY-MM-DD
    remaining_cents: int


@dataclass
class MortgageSimulationResult:
    timeline: List[MortgageTimelinePoint]
    total_interest_cents: int
    outcome: MortgageOutcome = MortgageOutcome.PAID_OFF

    @property
    def payoff_date_iso(self) -> Optional[str]:
        return self.timeline[-1].date_iso if self.timeline else None


@dataclass
class MortgageOverpaymentPlan:
    """Baseline vs. with-extra mortgage trajectories and their difference"""

    baseline: MortgageSimulationResult
    with_extra: MortgageSimulationResult
    payoff_date_baseline_iso: Optional[str]
    payoff_date_with_extra_iso: Optional[str]
    time_saved_fortnights: int
    interest_saved_cents: int
    extra_available_after_fortnights: Optional[int] = 0  # None: never available
