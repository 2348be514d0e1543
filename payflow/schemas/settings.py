"""
PaymentSettings: the business configuration of the engine.

Loaded and persisted by services.settings; validated here so that an
inconsistent document never reaches the verification router.
"""
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from payflow.models import PaymentType, VerificationMethod


class CompanyDetails(BaseModel):
    name: str = "Metah Travel"
    address: str = "Addis Ababa, Ethiopia"
    phone: str = "+251-11-123-4567"
    email: str = "payments@metah.travel"
    tax_id: Optional[str] = None


class PaymentSettings(BaseModel):
    # General
    enabled_methods: List[PaymentType] = Field(default_factory=lambda: [
        PaymentType.CREDIT_CARD,
        PaymentType.MOBILE_MONEY,
        PaymentType.BANK_TRANSFER,
        PaymentType.TELEBIRR,
    ])
    default_method: PaymentType = PaymentType.CREDIT_CARD
    currency: str = "ETB"

    # Processing mode
    processing_mode: VerificationMethod = VerificationMethod.HYBRID
    require_manual_verification_above: Decimal = Decimal("10000")
    auto_approve_below: Decimal = Decimal("1000")

    # Limits
    enable_fraud_detection: bool = True
    max_daily_amount: Decimal = Decimal("100000")
    max_transaction_amount: Decimal = Decimal("50000")

    # Notifications (pass-through)
    notify_on_payment: bool = True
    notify_on_failure: bool = True
    admin_notification_emails: List[str] = Field(
        default_factory=lambda: ["admin@metah.travel"]
    )

    # Receipts
    generate_receipts: bool = True
    receipt_template: str = "standard"
    company_details: CompanyDetails = Field(default_factory=CompanyDetails)

    model_config = ConfigDict(extra="forbid")

    @field_validator(
        "require_manual_verification_above",
        "auto_approve_below",
        "max_daily_amount",
        "max_transaction_amount",
    )
    @classmethod
    def non_negative(cls, v):
        if v < 0:
            raise ValueError("amounts must be non-negative")
        return v

    @model_validator(mode="after")
    def thresholds_in_order(self):
        if self.auto_approve_below > self.require_manual_verification_above:
            raise ValueError(
                "auto_approve_below must not exceed require_manual_verification_above"
            )
        return self
