from datetime import datetime, timezone

from payflow.processors.base import SimulatedGateway


class StripeGateway(SimulatedGateway):
    """
    Card processor mock (credit and debit cards).
    Amounts are reported in minor units, like the real API.
    """

    reference_prefix = "pi"

    @property
    def gateway_name(self) -> str:
        return "stripe"

    def _response(self, reference, amount, currency, method, metadata):
        return {
            "id": reference,
            "object": "payment_intent",
            "status": "succeeded",
            "amount_received": int(amount * 100),
            "currency": currency.lower(),
            "card_last4": metadata.get("card_last4"),
            "created": int(datetime.now(timezone.utc).timestamp()),
        }


class PayPalGateway(SimulatedGateway):
    reference_prefix = "PAYID"

    @property
    def gateway_name(self) -> str:
        return "paypal"

    def _response(self, reference, amount, currency, method, metadata):
        return {
            "id": reference,
            "status": "COMPLETED",
            "purchase_units": [
                {"amount": {"currency_code": currency, "value": str(amount)}}
            ],
        }
