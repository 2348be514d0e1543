"""
Admin verification workflow.

The only way out of requires_verification: an administrator approves
(-> verified) or rejects (-> declined). There is no expiry; queued
transactions wait until someone acts on them.
"""
import logging
from typing import List, Optional

from payflow import models
from payflow.errors import InvalidStateError
from payflow.models import PaymentStatus
from payflow.services.lifecycle import transition, utcnow
from payflow.services.store import TransactionStore

logger = logging.getLogger(__name__)


class VerificationWorkflow:
    def __init__(self, store: TransactionStore):
        self.store = store

    def verify(
        self,
        transaction_id: str,
        admin_id: str,
        approved: bool,
        notes: Optional[str] = None,
    ) -> models.PaymentTransaction:
        """
        Raises:
            NotFoundError: no such transaction
            InvalidStateError: transaction is not awaiting verification
        """
        txn = self.store.require(transaction_id)
        if txn.status != PaymentStatus.REQUIRES_VERIFICATION.value:
            raise InvalidStateError(
                txn.id,
                txn.status,
                f"Transaction {txn.id} is '{txn.status}', not awaiting verification",
            )

        transition(txn, PaymentStatus.VERIFIED if approved else PaymentStatus.DECLINED)
        txn.verified_at = utcnow()
        txn.verified_by = admin_id
        txn.verification_notes = notes
        txn = self.store.update(txn)

        logger.info("%s %s by %s", txn.id, txn.status, admin_id)
        return txn

    def list_pending(self) -> List[models.PaymentTransaction]:
        return self.store.list_by_status(
            PaymentStatus.PENDING, PaymentStatus.REQUIRES_VERIFICATION
        )
