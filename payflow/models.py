import enum
import uuid

from sqlalchemy import Column, String, Numeric, DateTime, Integer, Text, JSON
from sqlalchemy.orm import validates

from payflow.database import Base


class PaymentType(str, enum.Enum):
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    MOBILE_MONEY = "mobile_money"
    BANK_TRANSFER = "bank_transfer"
    PAYPAL = "paypal"
    STRIPE = "stripe"
    TELEBIRR = "telebirr"
    CBEBE = "cbebe"
    MPESA = "mpesa"
    AIRTEL_MONEY = "airtel_money"
    EBIRR = "ebirr"
    CASH = "cash"
    CRYPTO = "crypto"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    REQUIRES_VERIFICATION = "requires_verification"
    COMPLETED = "completed"
    VERIFIED = "verified"
    DECLINED = "declined"
    FAILED = "failed"


class VerificationMethod(str, enum.Enum):
    AUTOMATIC = "automatic"
    MANUAL = "manual"
    HYBRID = "hybrid"


def generate_id():
    return f"tx_{uuid.uuid4().hex}"


class PaymentTransaction(Base):
    __tablename__ = "payment_transactions"

    id = Column(String, primary_key=True, default=generate_id)
    booking_id = Column(String, nullable=False, index=True)
    user_id = Column(String, nullable=False, index=True)
    amount = Column(Numeric(14, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    payment_method = Column(String, nullable=False)
    gateway = Column(String, nullable=False)
    gateway_transaction_id = Column(String, nullable=True)
    description = Column(String, nullable=True)
    status = Column(String, nullable=False, default=PaymentStatus.PENDING.value, index=True)
    verification_method = Column(String, nullable=False)
    # "metadata" is reserved on declarative classes, hence the attribute name
    payment_metadata = Column("metadata", JSON, nullable=False, default=dict)

    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)
    processed_at = Column(DateTime, nullable=True)
    verified_at = Column(DateTime, nullable=True)
    verified_by = Column(String, nullable=True)
    verification_notes = Column(String, nullable=True)

    error_message = Column(String, nullable=True)
    retry_count = Column(Integer, nullable=False, default=0)
    receipt_url = Column(Text, nullable=True)

    # Optimistic concurrency: UPDATEs carry "WHERE version = <loaded>"
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    @validates("verification_method")
    def _freeze_verification_method(self, key, value):
        current = self.__dict__.get(key)
        if current is not None and current != value:
            raise ValueError("verification_method cannot change after creation")
        return value

    def __repr__(self):
        return f"<PaymentTransaction {self.id} {self.status}>"


class SettingsRecord(Base):
    """Key/value blob store; one row per settings document."""

    __tablename__ = "payment_settings"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, nullable=False)
