"""Dependency injection for FastAPI endpoints"""

from typing import Optional
from fastapi import HTTPException, Query, Request

from barefoot_budget.config import settings
from barefoot_budget.domain.buckets import DEFAULT_ALLOCATION_BPS, BarefootBucket, fire_extinguisher_amount
from barefoot_budget.domain.money import Money


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_income_fire_extinguisher_cents(
    fortnightly_income_cents: Optional[int] = Query(
        None, ge=0, description="Fortnightly income; the Fire Extinguisher share becomes the extra payment"
    ),
    fire_extinguisher_bps: int = Query(
        DEFAULT_ALLOCATION_BPS[BarefootBucket.FIRE_EXTINGUISHER],
        ge=0,
        le=10000,
        description="Fire Extinguisher share of income in basis points",
    ),
) -> Optional[int]:
    """Fire Extinguisher amount derived from income, or None when no income was sent"""
    if fortnightly_income_cents is None:
        return None
    income = Money(fortnightly_income_cents, settings.currency)
    return fire_extinguisher_amount(income, fire_extinguisher_bps).cents


def resolve_extra_cents(explicit_cents: Optional[int], income_cents: Optional[int]) -> int:
    """Pick the explicit extra payment or the income-derived one; sending both is a 422"""
    if explicit_cents is not None and income_cents is not None:
        raise HTTPException(
            status_code=422,
            detail="Send either an extra payment in cents or fortnightly_income_cents, not both",
        )
    if explicit_cents is not None:
        return explicit_cents
    if income_cents is not None:
        return income_cents
    return 0
