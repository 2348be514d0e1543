"""
PaymentService: explicit wiring of the engine's components.

One instance per database session. Nothing here is a module-level singleton,
so tests build their own with an in-memory session and fake gateways.
"""
from typing import Dict, List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from payflow import models
from payflow.database import get_db
from payflow.processors.base import BaseGateway
from payflow.schemas.requests import PaymentForm
from payflow.schemas.responses import PaymentMethodResponse, PaymentSummary
from payflow.schemas.settings import PaymentSettings
from payflow.services import analytics, catalog
from payflow.services.processor import TransactionProcessor
from payflow.services.receipts import ReceiptGenerator
from payflow.services.settings import SettingsResolver
from payflow.services.store import TransactionStore
from payflow.services.verification import VerificationWorkflow


class PaymentService:
    def __init__(self, db: Session, gateways: Optional[Dict[str, BaseGateway]] = None):
        self.settings = SettingsResolver(db)
        self.store = TransactionStore(db)
        self.processor = TransactionProcessor(self.store, self.settings, gateways)
        self.verification = VerificationWorkflow(self.store)
        self.receipts = ReceiptGenerator(self.store, self.settings)

    # Customer-facing
    async def submit(self, form: PaymentForm, booking_id: str, user_id: str) -> models.PaymentTransaction:
        return await self.processor.submit(form, booking_id, user_id)

    def get(self, transaction_id: str) -> models.PaymentTransaction:
        return self.store.require(transaction_id)

    def list_by_booking(self, booking_id: str) -> List[models.PaymentTransaction]:
        return self.store.list_by_booking(booking_id)

    def generate_receipt(self, transaction_id: str) -> str:
        return self.receipts.generate(transaction_id)

    def list_methods(self, enabled_only: bool = False) -> List[PaymentMethodResponse]:
        settings = self.settings.load()
        if enabled_only:
            return catalog.enabled_methods(settings)
        return catalog.list_methods(settings)

    # Admin
    def verify(self, transaction_id: str, admin_id: str, approved: bool, notes: Optional[str] = None):
        return self.verification.verify(transaction_id, admin_id, approved, notes)

    def list_pending(self) -> List[models.PaymentTransaction]:
        return self.verification.list_pending()

    def get_settings(self) -> PaymentSettings:
        return self.settings.load()

    def update_settings(self, partial: dict) -> PaymentSettings:
        return self.settings.update(partial)

    def summary(self) -> PaymentSummary:
        return analytics.summarize(self.store.list_all())


def get_payment_service(db: Session = Depends(get_db)) -> PaymentService:
    """FastAPI dependency."""
    return PaymentService(db)
