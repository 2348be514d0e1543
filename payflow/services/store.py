"""
Transaction store.

Durable id -> PaymentTransaction mapping on top of a SQLAlchemy session.
Every write commits before returning. Updates are version-checked: a writer
holding a stale copy gets ConcurrentUpdateError instead of overwriting a
newer record.
"""
from typing import List, Optional

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from payflow import models
from payflow.errors import ConcurrentUpdateError, DuplicateIdError, NotFoundError
from payflow.services.lifecycle import utcnow


class TransactionStore:
    def __init__(self, db: Session):
        self.db = db

    def insert(self, txn: models.PaymentTransaction) -> models.PaymentTransaction:
        if txn.id is None:
            txn.id = models.generate_id()
        if self.db.get(models.PaymentTransaction, txn.id) is not None:
            raise DuplicateIdError(txn.id)

        now = utcnow()
        if txn.created_at is None:
            txn.created_at = now
        if txn.updated_at is None:
            txn.updated_at = txn.created_at
        self.db.add(txn)
        self.db.commit()
        self.db.refresh(txn)
        return txn

    def update(self, txn: models.PaymentTransaction) -> models.PaymentTransaction:
        """Write the whole record back. Refreshes updated_at."""
        if self.db.get(models.PaymentTransaction, txn.id) is None:
            raise NotFoundError(txn.id)

        txn.updated_at = utcnow()
        transaction_id = txn.id
        try:
            txn = self.db.merge(txn)
            self.db.commit()
        except StaleDataError as e:
            self.db.rollback()
            raise ConcurrentUpdateError(transaction_id) from e
        self.db.refresh(txn)
        return txn

    def get(self, transaction_id: str) -> Optional[models.PaymentTransaction]:
        return self.db.get(models.PaymentTransaction, transaction_id)

    def require(self, transaction_id: str) -> models.PaymentTransaction:
        txn = self.get(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_id)
        return txn

    def list_by_status(self, *statuses) -> List[models.PaymentTransaction]:
        values = [getattr(s, "value", s) for s in statuses]
        return self._newest_first(
            self.db.query(models.PaymentTransaction).filter(
                models.PaymentTransaction.status.in_(values)
            )
        )

    def list_by_booking(self, booking_id: str) -> List[models.PaymentTransaction]:
        return self._newest_first(
            self.db.query(models.PaymentTransaction).filter(
                models.PaymentTransaction.booking_id == booking_id
            )
        )

    def list_all(self) -> List[models.PaymentTransaction]:
        return self._newest_first(self.db.query(models.PaymentTransaction))

    @staticmethod
    def _newest_first(query) -> List[models.PaymentTransaction]:
        return query.order_by(models.PaymentTransaction.created_at.desc()).all()
