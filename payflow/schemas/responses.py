from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Optional, List, Dict
from datetime import datetime
from decimal import Decimal


class TransactionResponse(BaseModel):
    id: str
    booking_id: str
    user_id: str
    amount: Decimal
    currency: str
    payment_method: str
    gateway: str
    gateway_transaction_id: Optional[str] = None
    description: Optional[str] = None
    status: str
    verification_method: str
    metadata: Dict[str, str] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("payment_metadata", "metadata"),
    )
    created_at: datetime
    updated_at: datetime
    processed_at: Optional[datetime] = None
    verified_at: Optional[datetime] = None
    verified_by: Optional[str] = None
    verification_notes: Optional[str] = None
    error_message: Optional[str] = None
    receipt_url: Optional[str] = None
    retry_count: int

    model_config = ConfigDict(from_attributes=True)


class BankConfig(BaseModel):
    account_number: str
    routing_number: str
    bank_name: str
    account_name: str


class PaymentMethodConfig(BaseModel):
    requires_manual_verification: bool
    auto_approve: bool
    max_amount: Decimal
    bank_config: Optional[BankConfig] = None


class PaymentMethodResponse(BaseModel):
    id: str
    type: str
    name: str
    icon: str
    enabled: bool
    config: PaymentMethodConfig


class ReceiptResponse(BaseModel):
    transaction_id: str
    receipt_url: str


class MethodBreakdown(BaseModel):
    count: int = 0
    amount: Decimal = Decimal("0")
    success_rate: float = 0.0


class DailyBreakdown(BaseModel):
    date: str
    transactions: int
    amount: Decimal


class PaymentSummary(BaseModel):
    total_transactions: int
    total_amount: Decimal
    success_rate: float
    avg_transaction_amount: Decimal
    by_method: Dict[str, MethodBreakdown]
    by_status: Dict[str, int]
    daily: List[DailyBreakdown]
