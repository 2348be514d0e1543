"""
Fixtures for the payment engine tests.

Transactions and the settings document live in one in-memory SQLite
database that is rebuilt per test. Gateways are AsyncMocks; the `service`
fixture routes every gateway key to one approving mock.
"""
import pytest
from datetime import datetime, timedelta
from decimal import Decimal
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from typing import Optional
from unittest.mock import AsyncMock

from payflow.database import Base, get_db
from payflow import models
from payflow.services.payments import PaymentService
from payflow.services.settings import SettingsResolver


# ---------------------------------------------------------------------------
# One sqlite3 connection (StaticPool) backs every session, so a second
# TestingSession sees the same payment_transactions and payment_settings rows.
# ---------------------------------------------------------------------------
TEST_ENGINE = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=TEST_ENGINE)


@pytest.fixture(autouse=True)
def reset_db():
    """Fresh payment_transactions and payment_settings tables per test."""
    Base.metadata.drop_all(bind=TEST_ENGINE)
    Base.metadata.create_all(bind=TEST_ENGINE)
    yield
    Base.metadata.drop_all(bind=TEST_ENGINE)


@pytest.fixture
def db(reset_db):
    """Session shared by the store, settings resolver and API under test."""
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    """
    API client whose PaymentService is built on the test session.
    Used without `with` so the lifespan never touches payflow.db on disk.
    """
    from payflow.main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def gateway():
    """A gateway that always approves."""
    return mock_gateway({"gateway_transaction_id": "gw_test_001", "status": "succeeded"})


@pytest.fixture
def service(db, gateway):
    """PaymentService whose every gateway key resolves to the approving mock."""
    gateways = {
        name: gateway
        for name in ("stripe", "paypal", "telebirr", "cbe", "safaricom", "airtel", "manual")
    }
    return PaymentService(db, gateways=gateways)


@pytest.fixture
def hybrid_settings(db):
    """The default hybrid settings: auto <= 1000, manual >= 10000."""
    return SettingsResolver(db).update({
        "processing_mode": "hybrid",
        "auto_approve_below": Decimal("1000"),
        "require_manual_verification_above": Decimal("10000"),
    })


# ---------------------------------------------------------------------------
# Helpers: not fixtures, so any test file can import and call them directly.
# ---------------------------------------------------------------------------
def mock_gateway(response=None, error=None):
    """Return a mock gateway whose charge() returns `response` or raises `error`."""
    m = AsyncMock()
    if error is not None:
        m.charge = AsyncMock(side_effect=error)
    else:
        m.charge = AsyncMock(return_value=response)
    return m


def make_txn(
    db,
    txn_id: str,
    booking_id: str = "bk_001",
    user_id: str = "user_001",
    amount: Decimal = Decimal("1000.00"),
    currency: str = "ETB",
    payment_method: str = "credit_card",
    gateway: str = "stripe",
    status: str = "requires_verification",
    verification_method: str = "manual",
    created_at: Optional[datetime] = None,   # defaults to 1 hour ago
) -> models.PaymentTransaction:
    if created_at is None:
        created_at = datetime.utcnow() - timedelta(hours=1)
    txn = models.PaymentTransaction(
        id=txn_id,
        booking_id=booking_id,
        user_id=user_id,
        amount=amount,
        currency=currency,
        payment_method=payment_method,
        gateway=gateway,
        status=status,
        verification_method=verification_method,
        payment_metadata={},
        created_at=created_at,
        updated_at=created_at,
        retry_count=0,
    )
    db.add(txn)
    db.commit()
    db.refresh(txn)
    return txn
