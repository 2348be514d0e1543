"""
Status state machine for payment transactions.

    pending ──> completed | failed | requires_verification
    requires_verification ──> verified | declined

completed, verified, declined and failed are terminal.
"""
from datetime import datetime, timezone

from payflow import models
from payflow.errors import InvalidStateError
from payflow.models import PaymentStatus


TRANSITIONS = {
    PaymentStatus.PENDING: {
        PaymentStatus.COMPLETED,
        PaymentStatus.FAILED,
        PaymentStatus.REQUIRES_VERIFICATION,
    },
    PaymentStatus.REQUIRES_VERIFICATION: {
        PaymentStatus.VERIFIED,
        PaymentStatus.DECLINED,
    },
}


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def transition(txn: models.PaymentTransaction, new_status: PaymentStatus) -> None:
    """Move txn to new_status in memory; the caller persists it."""
    current = PaymentStatus(txn.status)
    if new_status not in TRANSITIONS.get(current, set()):
        raise InvalidStateError(
            txn.id,
            current.value,
            f"Transaction {txn.id} cannot move from '{current.value}' to '{new_status.value}'",
        )
    txn.status = new_status.value
