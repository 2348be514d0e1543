from decimal import Decimal
from typing import Optional, Dict

from pydantic import BaseModel, Field, field_validator

from payflow.models import PaymentType


class PaymentForm(BaseModel):
    """What the checkout form submits. Card fields are never persisted as-is."""

    payment_method: PaymentType
    amount: Decimal = Field(gt=0, decimal_places=2)
    currency: str = Field(min_length=3, max_length=3)

    # Card
    card_number: Optional[str] = None
    expiry_month: Optional[str] = None
    expiry_year: Optional[str] = None
    cvv: Optional[str] = None
    card_holder_name: Optional[str] = None

    # Mobile money
    phone_number: Optional[str] = None
    operator: Optional[str] = None

    # Bank transfer
    bank_account: Optional[str] = None
    bank_code: Optional[str] = None
    account_holder_name: Optional[str] = None

    # PayPal
    paypal_order_id: Optional[str] = None
    paypal_payer_id: Optional[str] = None
    paypal_email: Optional[str] = None

    notes: Optional[str] = None

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, v):
        return v.upper()

    def to_metadata(self) -> Dict[str, str]:
        """Opaque pass-through fields stored on the transaction."""
        metadata = {
            "card_last4": self.card_number[-4:] if self.card_number else None,
            "phone_number": self.phone_number,
            "notes": self.notes,
        }
        return {k: v for k, v in metadata.items() if v is not None}


class SubmitPaymentRequest(BaseModel):
    booking_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    payment: PaymentForm


class VerifyRequest(BaseModel):
    admin_id: str = Field(min_length=1)
    approved: bool
    notes: Optional[str] = None
