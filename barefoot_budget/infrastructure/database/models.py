"""SQLAlchemy ORM models for persisted debts"""

import uuid
from sqlalchemy import Column, BigInteger, Float, DateTime, Integer, Text, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class DebtRecord(Base):
    """A user's debt (credit card or mortgage)"""

    __tablename__ = "debt"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    name = Column(Text, nullable=False)
    debt_type = Column(Text, nullable=False)  # credit-card | mortgage
    original_amount_cents = Column(BigInteger, nullable=False)
    current_balance_cents = Column(BigInteger, nullable=False)
    interest_rate = Column(Float, nullable=False)
    minimum_payment_cents = Column(BigInteger, nullable=False)
    min_payment_frequency = Column(Text, nullable=False, default="FORTNIGHTLY")
    priority = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
