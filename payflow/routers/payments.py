from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from payflow.errors import ConcurrentUpdateError, GatewayFailure, NotFoundError
from payflow.schemas.requests import SubmitPaymentRequest
from payflow.schemas.responses import (
    PaymentMethodResponse,
    ReceiptResponse,
    TransactionResponse,
)
from payflow.services.payments import PaymentService, get_payment_service

router = APIRouter()


@router.post("/payments", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def submit_payment(
    request: SubmitPaymentRequest,
    service: PaymentService = Depends(get_payment_service),
):
    """
    Submit a payment for a booking.

    - Small amounts (or processing_mode=automatic) are charged right away
      and come back `completed`
    - Everything else comes back `requires_verification` and waits for an admin
    """
    try:
        txn = await service.submit(request.payment, request.booking_id, request.user_id)
    except GatewayFailure as e:
        raise HTTPException(
            status_code=502,
            detail={
                "error": f"Gateway error: {str(e)}",
                "transaction_id": e.transaction.id if e.transaction else None,
            },
        )
    except ConcurrentUpdateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return TransactionResponse.model_validate(txn)


@router.get("/payments", response_model=List[TransactionResponse])
def list_booking_payments(booking_id: str, service: PaymentService = Depends(get_payment_service)):
    """All payment attempts for a booking, newest first."""
    return [TransactionResponse.model_validate(t) for t in service.list_by_booking(booking_id)]


@router.get("/payments/{transaction_id}", response_model=TransactionResponse)
def get_payment(transaction_id: str, service: PaymentService = Depends(get_payment_service)):
    try:
        txn = service.get(transaction_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return TransactionResponse.model_validate(txn)


@router.post("/payments/{transaction_id}/receipt", response_model=ReceiptResponse)
def generate_receipt(transaction_id: str, service: PaymentService = Depends(get_payment_service)):
    """(Re)generate the receipt document; the latest reference replaces the previous one."""
    try:
        receipt_url = service.generate_receipt(transaction_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConcurrentUpdateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return ReceiptResponse(transaction_id=transaction_id, receipt_url=receipt_url)


@router.get("/payment-methods", response_model=List[PaymentMethodResponse])
def list_payment_methods(enabled_only: bool = False, service: PaymentService = Depends(get_payment_service)):
    return service.list_methods(enabled_only=enabled_only)
