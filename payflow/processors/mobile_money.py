"""
Mobile-money processor mocks.

All of them confirm against the payer's phone number; a missing number is a
decline, the way the real USSD/STK push flows reject it.
"""
from datetime import datetime, timezone

from payflow.errors import GatewayFailure
from payflow.processors.base import SimulatedGateway


class MobileMoneyGateway(SimulatedGateway):
    provider = ""

    @property
    def gateway_name(self) -> str:
        return self.provider

    async def charge(self, amount, currency, method, metadata):
        if not metadata.get("phone_number"):
            raise GatewayFailure(
                f"{self.provider}: payer phone number is required", gateway=self.provider
            )
        return await super().charge(amount, currency, method, metadata)

    def _response(self, reference, amount, currency, method, metadata):
        return {
            "trade_no": reference,
            "trade_status": "SUCCESS",
            "msisdn": metadata["phone_number"],
            "total_amount": str(amount),
            "currency": currency,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }


class TelebirrGateway(MobileMoneyGateway):
    provider = "telebirr"
    reference_prefix = "TB"


class CbeGateway(MobileMoneyGateway):
    provider = "cbe"
    reference_prefix = "CBE"


class SafaricomGateway(MobileMoneyGateway):
    """M-Pesa STK push."""

    provider = "safaricom"
    reference_prefix = "MPS"

    def _response(self, reference, amount, currency, method, metadata):
        return {
            "MpesaReceiptNumber": reference,
            "ResultCode": 0,
            "ResultDesc": "The service request is processed successfully.",
            "PhoneNumber": metadata["phone_number"],
            "Amount": str(amount),
        }


class AirtelGateway(MobileMoneyGateway):
    provider = "airtel"
    reference_prefix = "AM"
