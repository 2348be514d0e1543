from datetime import datetime, timezone

from payflow.processors.base import SimulatedGateway


class ManualLedgerGateway(SimulatedGateway):
    """
    Offline methods (bank transfer, cash). There is no processor to call;
    when such a payment is auto-approved it is booked straight to the ledger.
    """

    reference_prefix = "LEDGER"

    @property
    def gateway_name(self) -> str:
        return "manual"

    def _response(self, reference, amount, currency, method, metadata):
        return {
            "ledger_entry": reference,
            "method": method,
            "amount": str(amount),
            "currency": currency,
            "booked_at": datetime.now(timezone.utc).isoformat(),
        }
