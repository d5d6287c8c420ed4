"""Data access layer for debts"""

import uuid
from typing import List, Optional
from sqlalchemy.orm import Session
from barefoot_budget.config import settings
from barefoot_budget.infrastructure.database.models import DebtRecord
from barefoot_budget.domain.models import Debt, DebtType, PaymentFrequency
from barefoot_budget.domain.money import Money


def _parse_id(debt_id: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(debt_id))
    except ValueError:
        return None


class DebtRepository:
    """Repository for user debts, returning domain Debt snapshots"""

    def __init__(self, db: Session):
        self.db = db

    def add(self, user_id: str, debt: Debt) -> Debt:
        """Persist a validated debt"""
        record = DebtRecord(id=uuid.UUID(debt.id), user_id=user_id)
        self._copy_onto(record, debt)
        self.db.add(record)
        self.db.flush()  # Get ID without committing
        return self.to_domain(record)

    def find_by_id(self, user_id: str, debt_id: str) -> Optional[Debt]:
        record = self._get_record(user_id, debt_id)
        return self.to_domain(record) if record else None

    def find_by_priority(self, user_id: str) -> List[Debt]:
        """All user debts in snowball order: priority, then smallest balance"""
        records = (
            self.db.query(DebtRecord)
            .filter(DebtRecord.user_id == user_id)
            .order_by(DebtRecord.priority.asc(), DebtRecord.current_balance_cents.asc())
            .all()
        )
        return [self.to_domain(r) for r in records]

    def find_by_type(self, user_id: str, debt_type: DebtType) -> List[Debt]:
        records = (
            self.db.query(DebtRecord)
            .filter(DebtRecord.user_id == user_id, DebtRecord.debt_type == debt_type.value)
            .order_by(DebtRecord.created_at.asc())
            .all()
        )
        return [self.to_domain(r) for r in records]

    def update(self, user_id: str, debt: Debt) -> Optional[Debt]:
        """Overwrite a stored debt in place; None if it does not exist"""
        record = self._get_record(user_id, debt.id)
        if record is None:
            return None
        self._copy_onto(record, debt)
        self.db.flush()
        return self.to_domain(record)

    def delete(self, user_id: str, debt_id: str) -> bool:
        """Delete a debt; False if it does not exist"""
        record = self._get_record(user_id, debt_id)
        if record is None:
            return False
        self.db.delete(record)
        self.db.flush()
        return True

    def upsert_mortgage(self, user_id: str, mortgage: Debt) -> Debt:
        """Replace the user's mortgage in place, or create it. A user holds one mortgage."""
        record = (
            self.db.query(DebtRecord)
            .filter(DebtRecord.user_id == user_id, DebtRecord.debt_type == DebtType.MORTGAGE.value)
            .first()
        )
        if record is None:
            return self.add(user_id, mortgage)

        self._copy_onto(record, mortgage)
        self.db.flush()
        return self.to_domain(record)

    def _get_record(self, user_id: str, debt_id: str) -> Optional[DebtRecord]:
        record_id = _parse_id(debt_id)
        if record_id is None:
            return None
        return (
            self.db.query(DebtRecord)
            .filter(DebtRecord.id == record_id, DebtRecord.user_id == user_id)
            .first()
        )

    @staticmethod
    def _copy_onto(record: DebtRecord, debt: Debt) -> None:
        record.name = debt.name
        record.debt_type = DebtType(debt.debt_type).value
        record.original_amount_cents = debt.original_amount.cents
        record.current_balance_cents = debt.current_balance.cents
        record.interest_rate = debt.interest_rate
        record.minimum_payment_cents = debt.minimum_payment.cents
        record.min_payment_frequency = PaymentFrequency(debt.min_payment_frequency).value
        record.priority = debt.priority

    @staticmethod
    def to_domain(record: DebtRecord) -> Debt:
        currency = settings.currency
        return Debt(
            id=str(record.id),
            name=record.name,
            debt_type=DebtType(record.debt_type),
            original_amount=Money(record.original_amount_cents, currency),
            current_balance=Money(record.current_balance_cents, currency),
            interest_rate=record.interest_rate,
            minimum_payment=Money(record.minimum_payment_cents, currency),
            min_payment_frequency=PaymentFrequency(record.min_payment_frequency),
            priority=record.priority,
        )
