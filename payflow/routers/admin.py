from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException

from payflow.errors import ConcurrentUpdateError, ConfigurationError, InvalidStateError, NotFoundError
from payflow.schemas.requests import VerifyRequest
from payflow.schemas.responses import PaymentSummary, TransactionResponse
from payflow.schemas.settings import PaymentSettings
from payflow.services.payments import PaymentService, get_payment_service

router = APIRouter()


@router.get("/payments/pending", response_model=List[TransactionResponse])
def list_pending(service: PaymentService = Depends(get_payment_service)):
    """Verification queue: pending and requires_verification, newest first."""
    return [TransactionResponse.model_validate(t) for t in service.list_pending()]


@router.post("/payments/{transaction_id}/verify", response_model=TransactionResponse)
def verify_payment(
    transaction_id: str,
    request: VerifyRequest,
    service: PaymentService = Depends(get_payment_service),
):
    """
    Approve (-> verified) or reject (-> declined) a queued payment.

    Returns 404 for unknown ids and 409 when the payment is not awaiting
    verification or was changed by another admin in the meantime.
    """
    try:
        txn = service.verify(transaction_id, request.admin_id, request.approved, request.notes)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (InvalidStateError, ConcurrentUpdateError) as e:
        raise HTTPException(status_code=409, detail=str(e))
    return TransactionResponse.model_validate(txn)


@router.get("/settings", response_model=PaymentSettings)
def get_settings(service: PaymentService = Depends(get_payment_service)):
    return service.get_settings()


@router.patch("/settings", response_model=PaymentSettings)
def update_settings(
    partial: Dict[str, Any] = Body(...),
    service: PaymentService = Depends(get_payment_service),
):
    """
    Shallow update: top-level fields replace the stored ones;
    send company_details whole when changing it.
    """
    try:
        return service.update_settings(partial)
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/analytics", response_model=PaymentSummary)
def analytics(service: PaymentService = Depends(get_payment_service)):
    return service.summary()
