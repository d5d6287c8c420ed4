"""Barefoot bucket allocation - splitting fortnightly income by basis points"""

from enum import Enum
from typing import Dict, Optional

from barefoot_budget.domain.exceptions import ValidationError
from barefoot_budget.domain.money import Money

BPS_DENOMINATOR = 10_000  # 100%


class BarefootBucket(str, Enum):
    DAILY_EXPENSES = "Daily Expenses"
    SPLURGE = "Splurge"
    SMILE = "Smile"
    FIRE_EXTINGUISHER = "Fire Extinguisher"
    MOJO = "Mojo"
    GROW = "Grow"


# Blow buckets must always receive something; Mojo and Grow may be 0
REQUIRED_BUCKETS = frozenset(
    {
        BarefootBucket.DAILY_EXPENSES,
        BarefootBucket.SPLURGE,
        BarefootBucket.SMILE,
        BarefootBucket.FIRE_EXTINGUISHER,
    }
)

DEFAULT_ALLOCATION_BPS: Dict[BarefootBucket, int] = {
    BarefootBucket.DAILY_EXPENSES: 6000,
    BarefootBucket.SPLURGE: 1000,
    BarefootBucket.SMILE: 1000,
    BarefootBucket.FIRE_EXTINGUISHER: 2000,
    BarefootBucket.MOJO: 0,
    BarefootBucket.GROW: 0,
}


def validate_allocation(allocation_bps: Dict[BarefootBucket, int]) -> None:
    """
    Check an allocation is a complete split of income.

    Rules:
    - each bucket between 0 and 10000 bps
    - Daily Expenses, Splurge, Smile and Fire Extinguisher above 0
    - buckets total exactly 10000 bps (100%)

    Raises:
        ValidationError: On the first rule broken
    """
    for bucket, bps in allocation_bps.items():
        if bps < 0 or bps > BPS_DENOMINATOR:
            raise ValidationError(f"{bucket.value} allocation must be between 0 and 10000 bps")

    for bucket in REQUIRED_BUCKETS:
        if allocation_bps.get(bucket, 0) <= 0:
            raise ValidationError(f"{bucket.value} must have a positive allocation")

    total = sum(allocation_bps.values())
    if total != BPS_DENOMINATOR:
        raise ValidationError(f"Allocations must total 10000 bps, got {total}")


def allocate_income(
    income: Money,
    allocation_bps: Optional[Dict[BarefootBucket, int]] = None,
) -> Dict[BarefootBucket, Money]:
    """
    Split fortnightly income across the Barefoot buckets.

    Each share is floored to whole cents; Daily Expenses absorbs the rounding
    remainder so the split always sums to the income.

    Example:
        100001 cents at 60/10/10/20 -> 60001, 10000, 10000, 20000, 0, 0
    """
    if income.cents < 0:
        raise ValidationError("Income cannot be negative")

    if allocation_bps is None:
        allocation_bps = DEFAULT_ALLOCATION_BPS
    validate_allocation(allocation_bps)

    split = {
        bucket: Money((income.cents * allocation_bps.get(bucket, 0)) // BPS_DENOMINATOR, income.currency)
        for bucket in BarefootBucket
    }

    remainder = income.cents - sum(amount.cents for amount in split.values())
    split[BarefootBucket.DAILY_EXPENSES] = split[BarefootBucket.DAILY_EXPENSES].add(
        Money(remainder, income.currency)
    )
    return split


def fire_extinguisher_amount(income: Money, fire_extinguisher_bps: int) -> Money:
    """Fortnightly Fire Extinguisher amount: floor(income * bps / 10000)"""
    if income.cents < 0:
        raise ValidationError("Income cannot be negative")
    if fire_extinguisher_bps < 0 or fire_extinguisher_bps > BPS_DENOMINATOR:
        raise ValidationError("Fire Extinguisher percent must be between 0 and 100")
    return Money((income.cents * fire_extinguisher_bps) // BPS_DENOMINATOR, income.currency)
