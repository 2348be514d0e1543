"""
Transaction processor.

Orchestrates one payment attempt:
1. Create a pending record (gateway resolved from the method, route decided once)
2. automatic route: charge through the gateway -> completed, or failed + GatewayFailure
3. manual / hybrid route: park the record in requires_verification
4. Every transition reloads the record and writes it back whole

Each call creates a new transaction; de-duplication belongs to the caller.
"""
import logging
from typing import Dict, Optional

from payflow import models
from payflow.errors import GatewayFailure
from payflow.models import PaymentStatus, VerificationMethod
from payflow.processors.base import BaseGateway
from payflow.processors.card import PayPalGateway, StripeGateway
from payflow.processors.manual import ManualLedgerGateway
from payflow.processors.mobile_money import (
    AirtelGateway,
    CbeGateway,
    SafaricomGateway,
    TelebirrGateway,
)
from payflow.schemas.requests import PaymentForm
from payflow.services.lifecycle import transition, utcnow
from payflow.services.routing import route, uses_manual_queue
from payflow.services.settings import SettingsResolver
from payflow.services.store import TransactionStore

logger = logging.getLogger(__name__)


GATEWAY_FOR_METHOD = {
    "credit_card": "stripe",
    "debit_card": "stripe",
    "telebirr": "telebirr",
    "cbebe": "cbe",
    "mpesa": "safaricom",
    "airtel_money": "airtel",
    "bank_transfer": "manual",
    "paypal": "paypal",
    "cash": "manual",
}

UNKNOWN_GATEWAY = "unknown"

GATEWAY_MAP: Dict[str, BaseGateway] = {
    "stripe": StripeGateway(),
    "paypal": PayPalGateway(),
    "telebirr": TelebirrGateway(),
    "cbe": CbeGateway(),
    "safaricom": SafaricomGateway(),
    "airtel": AirtelGateway(),
    "manual": ManualLedgerGateway(),
}


def gateway_for_method(method) -> str:
    return GATEWAY_FOR_METHOD.get(getattr(method, "value", method), UNKNOWN_GATEWAY)


class TransactionProcessor:
    def __init__(
        self,
        store: TransactionStore,
        settings: SettingsResolver,
        gateways: Optional[Dict[str, BaseGateway]] = None,
    ):
        self.store = store
        self.settings = settings
        self.gateways = gateways

    def _gateway(self, name: str) -> Optional[BaseGateway]:
        gateways = GATEWAY_MAP if self.gateways is None else self.gateways
        return gateways.get(name)

    async def submit(self, form: PaymentForm, booking_id: str, user_id: str) -> models.PaymentTransaction:
        """
        Record and process one payment.

        Returns the transaction in completed or requires_verification.

        Raises:
            GatewayFailure: automatic path failed; the record is already `failed`
        """
        verification_method = route(form.amount, self.settings.load())
        now = utcnow()

        txn = self.store.insert(models.PaymentTransaction(
            id=models.generate_id(),
            booking_id=booking_id,
            user_id=user_id,
            amount=form.amount,
            currency=form.currency,
            payment_method=form.payment_method.value,
            gateway=gateway_for_method(form.payment_method),
            description=f"Payment for booking {booking_id}",
            status=PaymentStatus.PENDING.value,
            verification_method=verification_method.value,
            payment_metadata=form.to_metadata(),
            created_at=now,
            updated_at=now,
            retry_count=0,
        ))
        logger.info(
            "Created %s: booking=%s amount=%s %s method=%s route=%s",
            txn.id, booking_id, form.amount, form.currency,
            txn.payment_method, verification_method.value,
        )

        if uses_manual_queue(verification_method):
            return self._queue_for_verification(txn.id)
        return await self._complete_automatically(txn.id)

    def _queue_for_verification(self, transaction_id: str) -> models.PaymentTransaction:
        txn = self.store.require(transaction_id)
        transition(txn, PaymentStatus.REQUIRES_VERIFICATION)
        txn = self.store.update(txn)
        logger.info("%s queued for manual verification", txn.id)
        return txn

    async def _complete_automatically(self, transaction_id: str) -> models.PaymentTransaction:
        txn = self.store.require(transaction_id)
        gateway = self._gateway(txn.gateway)

        try:
            if gateway is None:
                raise GatewayFailure(
                    f"No gateway registered for '{txn.gateway}'", gateway=txn.gateway
                )
            response = await gateway.charge(
                txn.amount, txn.currency, txn.payment_method, dict(txn.payment_metadata or {})
            )
        except GatewayFailure as e:
            logger.warning("%s declined by gateway %s: %s", txn.id, txn.gateway, e)
            failed = self._mark_failed(transaction_id, str(e))
            e.gateway = e.gateway or failed.gateway
            e.transaction = failed
            raise
        except Exception as e:
            # timeouts and transport errors end in failed as well
            message = f"{txn.gateway}: {type(e).__name__}: {e}".rstrip(": ")
            logger.exception("%s gateway %s raised unexpectedly", txn.id, txn.gateway)
            failed = self._mark_failed(transaction_id, message)
            raise GatewayFailure(message, gateway=failed.gateway, transaction=failed) from e

        txn = self.store.require(transaction_id)
        transition(txn, PaymentStatus.COMPLETED)
        now = utcnow()
        txn.processed_at = now
        txn.verified_at = now
        txn.gateway_transaction_id = response.get("gateway_transaction_id")
        txn = self.store.update(txn)
        logger.info("%s completed via %s ref=%s", txn.id, txn.gateway, txn.gateway_transaction_id)
        return txn

    def _mark_failed(self, transaction_id: str, message: str) -> models.PaymentTransaction:
        txn = self.store.require(transaction_id)
        transition(txn, PaymentStatus.FAILED)
        txn.error_message = message
        return self.store.update(txn)
