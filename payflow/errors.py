"""
Error taxonomy for the payment engine.

Every error is raised to the immediate caller. Routers translate them to
HTTP status codes; nothing here is recovered with a fallback value.
"""


class PaymentError(Exception):
    """Base class for all payment engine errors."""


class ConfigurationError(PaymentError):
    """Settings are malformed or inconsistent (e.g. thresholds out of order)."""


class DuplicateIdError(PaymentError):
    def __init__(self, transaction_id: str):
        super().__init__(f"Transaction {transaction_id} already exists")
        self.transaction_id = transaction_id


class NotFoundError(PaymentError):
    def __init__(self, transaction_id: str):
        super().__init__(f"Transaction {transaction_id} not found")
        self.transaction_id = transaction_id


class InvalidStateError(PaymentError):
    """An operation was attempted on a transaction in the wrong status."""

    def __init__(self, transaction_id: str, status: str, message: str = None):
        super().__init__(
            message or f"Transaction {transaction_id} is in state '{status}'"
        )
        self.transaction_id = transaction_id
        self.status = status


class ConcurrentUpdateError(PaymentError):
    """The record changed underneath the writer (version mismatch)."""

    def __init__(self, transaction_id: str):
        super().__init__(
            f"Transaction {transaction_id} was modified concurrently; reload and retry"
        )
        self.transaction_id = transaction_id


class GatewayFailure(PaymentError):
    """
    The gateway declined or could not be reached during the automatic path.

    `transaction` is set by the processor once the record has been moved to
    the failed state.
    """

    def __init__(self, message: str, gateway: str = None, transaction=None):
        super().__init__(message)
        self.gateway = gateway
        self.transaction = transaction
