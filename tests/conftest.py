"""Pytest fixtures for testing"""

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from barefoot_budget.api.main import create_app
from barefoot_budget.infrastructure.database.models import Base
from barefoot_budget.infrastructure.database.session import get_db
from barefoot_budget.domain.models import Debt, DebtType, PaymentFrequency
from barefoot_budget.domain.money import Money


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


def make_debt(
    debt_id: str,
    balance_cents: int,
    *,
    name: str | None = None,
    debt_type: DebtType = DebtType.CREDIT_CARD,
    interest_rate: float = 0.0,
    minimum_cents: int = 0,
    frequency: PaymentFrequency = PaymentFrequency.FORTNIGHTLY,
    priority: int = 1,
) -> Debt:
    """Build a debt whose original amount equals its current balance"""
    return Debt(
        id=debt_id,
        name=name or debt_id,
        debt_type=debt_type,
        original_amount=Money(balance_cents),
        current_balance=Money(balance_cents),
        interest_rate=interest_rate,
        minimum_payment=Money(minimum_cents),
        min_payment_frequency=frequency,
        priority=priority,
    )


@pytest.fixture
def visa() -> Debt:
    """Small high-interest credit card"""
    return make_debt("visa", 300000, name="Visa", interest_rate=0.1999, minimum_cents=10000, priority=1)


@pytest.fixture
def home_loan() -> Debt:
    """$450k mortgage at 5.5% with a $2000 fortnightly minimum"""
    return Debt(
        id="mortgage-1",
        name="Home Loan",
        debt_type=DebtType.MORTGAGE,
        original_amount=Money(50000000),
        current_balance=Money(45000000),
        interest_rate=0.055,
        minimum_payment=Money(200000),
        min_payment_frequency=PaymentFrequency.FORTNIGHTLY,
        priority=5,
    )


@pytest.fixture
def debt_factory():
    """Expose make_debt to tests"""
    return make_debt
