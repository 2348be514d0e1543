"""
Verification router: decides once, at creation, how a transaction is verified.

    processing_mode=automatic -> automatic
    processing_mode=manual    -> manual
    processing_mode=hybrid:
        amount <= auto_approve_below                 -> automatic
        amount >= require_manual_verification_above  -> manual
        otherwise                                    -> hybrid

Boundary amounts land on the automatic/manual side, never in the hybrid band.
A hybrid result is executed through the manual queue.
"""
from decimal import Decimal

from payflow.models import VerificationMethod
from payflow.schemas.settings import PaymentSettings


def route(amount, settings: PaymentSettings) -> VerificationMethod:
    if settings.processing_mode == VerificationMethod.AUTOMATIC:
        return VerificationMethod.AUTOMATIC
    if settings.processing_mode == VerificationMethod.MANUAL:
        return VerificationMethod.MANUAL

    amount = Decimal(str(amount))
    if amount <= settings.auto_approve_below:
        return VerificationMethod.AUTOMATIC
    if amount >= settings.require_manual_verification_above:
        return VerificationMethod.MANUAL
    return VerificationMethod.HYBRID


def uses_manual_queue(verification_method) -> bool:
    return VerificationMethod(verification_method) != VerificationMethod.AUTOMATIC
