"""
Payment method catalog.

Methods are a projection of the settings, never persisted. The per-method
table below is fixed; existing receipts and limits depend on these values.
"""
from decimal import Decimal
from typing import List

from payflow.models import PaymentType, VerificationMethod
from payflow.schemas.responses import (
    BankConfig,
    PaymentMethodConfig,
    PaymentMethodResponse,
)
from payflow.schemas.settings import PaymentSettings


BANK_TRANSFER_ACCOUNT = BankConfig(
    account_number="1234567890",
    routing_number="001",
    bank_name="Commercial Bank of Ethiopia",
    account_name="Metah Travel PLC",
)

# (type, name, icon, requires_manual_verification, auto_approve, max_amount)
# None in the verification columns means "follows processing_mode".
METHOD_TABLE = [
    (PaymentType.CREDIT_CARD, "Credit Card", "💳", False, True, 50000),
    (PaymentType.DEBIT_CARD, "Debit Card", "💴", False, True, 30000),
    (PaymentType.TELEBIRR, "TeleBirr", "📱", None, None, 20000),
    (PaymentType.CBEBE, "CBE Birr", "🏦", True, False, 100000),
    (PaymentType.MPESA, "M-Pesa", "📲", False, True, 25000),
    (PaymentType.AIRTEL_MONEY, "Airtel Money", "📞", False, True, 25000),
    (PaymentType.BANK_TRANSFER, "Bank Transfer", "🏛️", True, False, 1000000),
    (PaymentType.PAYPAL, "PayPal", "🌐", False, True, 10000),
    (PaymentType.CASH, "Cash Payment", "💵", True, False, 50000),
]


def list_methods(settings: PaymentSettings) -> List[PaymentMethodResponse]:
    enabled = set(settings.enabled_methods)
    methods = []
    for method_type, name, icon, manual, auto, max_amount in METHOD_TABLE:
        if manual is None:
            manual = settings.processing_mode == VerificationMethod.MANUAL
            auto = settings.processing_mode == VerificationMethod.AUTOMATIC

        methods.append(PaymentMethodResponse(
            id=method_type.value,
            type=method_type.value,
            name=name,
            icon=icon,
            enabled=method_type in enabled,
            config=PaymentMethodConfig(
                requires_manual_verification=manual,
                auto_approve=auto,
                max_amount=Decimal(max_amount),
                bank_config=BANK_TRANSFER_ACCOUNT if method_type == PaymentType.BANK_TRANSFER else None,
            ),
        ))
    return methods


def enabled_methods(settings: PaymentSettings) -> List[PaymentMethodResponse]:
    return [m for m in list_methods(settings) if m.enabled]
