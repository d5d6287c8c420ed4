"""/v1/debts - create, list, fetch, update and delete a user's debts"""

import uuid
import dataclasses
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from barefoot_budget.api.v1.schemas import DebtCreateRequest, DebtListResponse, DebtResponse, DebtUpdateRequest
from barefoot_budget.api.dependencies import get_request_id
from barefoot_budget.config import settings
from barefoot_budget.infrastructure.database.session import get_db
from barefoot_budget.infrastructure.database.repositories import DebtRepository
from barefoot_budget.infrastructure.observability.metrics import debt_mutation_counter
from barefoot_budget.domain.models import Debt, DebtType
from barefoot_budget.domain.money import Money
from barefoot_budget.domain.exceptions import ValidationError

router = APIRouter()

# Credit cards are attacked first; mortgages wait behind them
DEFAULT_PRIORITY = {
    DebtType.CREDIT_CARD: 1,
    DebtType.MORTGAGE: 10,
}


def debt_to_response(debt: Debt) -> DebtResponse:
    return DebtResponse(
        id=debt.id,
        name=debt.name,
        debt_type=debt.debt_type,
        original_amount_cents=debt.original_amount.cents,
        current_balance_cents=debt.current_balance.cents,
        interest_rate=debt.interest_rate,
        minimum_payment_cents=debt.minimum_payment.cents,
        min_payment_frequency=debt.min_payment_frequency,
        priority=debt.priority,
    )


@router.post("/debts", response_model=DebtResponse, status_code=201)
def create_debt(
    request_body: DebtCreateRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Create a debt for a user.

    Domain invariants (rate caps per type, mortgage priority >= 5,
    current balance <= original) are enforced by the Debt entity; violations
    return 422.
    """
    request_id = get_request_id(request)
    priority = request_body.priority
    if priority is None:
        priority = DEFAULT_PRIORITY[request_body.debt_type]

    try:
        debt = Debt(
            id=str(uuid.uuid4()),
            name=request_body.name,
            debt_type=request_body.debt_type,
            original_amount=Money(request_body.original_amount_cents, settings.currency),
            current_balance=Money(request_body.current_balance_cents, settings.currency),
            interest_rate=request_body.interest_rate,
            minimum_payment=Money(request_body.minimum_payment_cents, settings.currency),
            min_payment_frequency=request_body.min_payment_frequency,
            priority=priority,
        )
        saved = DebtRepository(db).add(request_body.user_id, debt)
        db.commit()

    except ValidationError as e:
        db.rollback()
        logging.warning(f"Invalid debt: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    debt_mutation_counter.labels(operation="create").inc()
    return debt_to_response(saved)


@router.get("/debts", response_model=DebtListResponse)
def list_debts(
    user_id: str = Query(..., description="User identifier"),
    db: Session = Depends(get_db),
):
    """List a user's debts in snowball order (priority, then smallest balance)"""
    debts = DebtRepository(db).find_by_priority(user_id)
    return DebtListResponse(user_id=user_id, debts=[debt_to_response(d) for d in debts])


@router.get("/debts/{debt_id}", response_model=DebtResponse)
def get_debt(
    debt_id: str,
    user_id: str = Query(..., description="User identifier"),
    db: Session = Depends(get_db),
):
    try:
        uuid.UUID(debt_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid debt ID format")

    debt = DebtRepository(db).find_by_id(user_id, debt_id)
    if not debt:
        raise HTTPException(status_code=404, detail="Debt not found")

    return debt_to_response(debt)


@router.patch("/debts/{debt_id}", response_model=DebtResponse)
def update_debt(
    debt_id: str,
    request_body: DebtUpdateRequest,
    request: Request,
    user_id: str = Query(..., description="User identifier"),
    db: Session = Depends(get_db),
):
    """
    Update some fields of a debt, keeping its id.

    The merged debt is rebuilt through the Debt entity, so every invariant is
    checked again; violations return 422.
    """
    request_id = get_request_id(request)
    try:
        uuid.UUID(debt_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid debt ID format")

    repo = DebtRepository(db)
    existing = repo.find_by_id(user_id, debt_id)
    if not existing:
        raise HTTPException(status_code=404, detail="Debt not found")

    changes = request_body.model_dump(exclude_unset=True, exclude_none=True)
    for field in ("original_amount", "current_balance", "minimum_payment"):
        cents = changes.pop(f"{field}_cents", None)
        if cents is not None:
            changes[field] = Money(cents, settings.currency)

    try:
        saved = repo.update(user_id, dataclasses.replace(existing, **changes))
        db.commit()

    except ValidationError as e:
        db.rollback()
        logging.warning(f"Invalid debt update: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    debt_mutation_counter.labels(operation="update").inc()
    return debt_to_response(saved)


@router.delete("/debts/{debt_id}", status_code=204)
def delete_debt(
    debt_id: str,
    user_id: str = Query(..., description="User identifier"),
    db: Session = Depends(get_db),
):
    try:
        uuid.UUID(debt_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid debt ID format")

    if not DebtRepository(db).delete(user_id, debt_id):
        raise HTTPException(status_code=404, detail="Debt not found")
    db.commit()

    debt_mutation_counter.labels(operation="delete").inc()
    return Response(status_code=204)
