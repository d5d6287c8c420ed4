"""Prometheus metrics for payoff plan outcomes, debt changes, and request latency"""

from prometheus_client import Counter, Histogram

from barefoot_budget.domain.models import MortgageOverpaymentPlan, SnowballPlan

# Plan metrics
plan_counter = Counter(
    "barefoot_payoff_plan_total",
    "Payoff plans computed",
    ["kind", "outcome"],  # kind: snowball | mortgage
)

plan_fortnights_histogram = Histogram(
    "barefoot_plan_fortnights",
    "Fortnights simulated per plan",
    ["kind"],
    buckets=[1, 13, 26, 52, 130, 260, 520, 780, 1040, 1300],
)

# Debt metrics
debt_mutation_counter = Counter(
    "barefoot_debt_mutations_total",
    "Debt create/update/delete operations",
    ["operation"],  # create | update | upsert_mortgage | delete
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_snowball_plan(plan: SnowballPlan) -> None:
    """Record snowball plan outcome: empty, converged, or capped"""
    if not plan.timeline:
        outcome = "empty"
    elif plan.converged:
        outcome = "converged"
    else:
        outcome = "capped"

    plan_counter.labels(kind="snowball", outcome=outcome).inc()
    plan_fortnights_histogram.labels(kind="snowball").observe(plan.fortnights)


def record_mortgage_plan(plan: MortgageOverpaymentPlan) -> None:
    """Record how the with-extra mortgage run ended"""
    if not plan.with_extra.timeline:
        outcome = "empty"
    else:
        outcome = plan.with_extra.outcome.value

    plan_counter.labels(kind="mortgage", outcome=outcome).inc()
    plan_fortnights_histogram.labels(kind="mortgage").observe(len(plan.with_extra.timeline))
