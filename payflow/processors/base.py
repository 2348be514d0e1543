import asyncio
import random
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Dict, Any

from payflow.config import get_settings
from payflow.errors import GatewayFailure


class BaseGateway(ABC):
    """Abstract base for all payment gateway collaborators."""

    @abstractmethod
    async def charge(
        self,
        amount: Decimal,
        currency: str,
        method: str,
        metadata: Dict[str, str],
    ) -> Dict[str, Any]:
        """
        Charge the customer.

        Returns the gateway's raw response; it always carries
        `gateway_transaction_id`. Raises GatewayFailure on decline or
        transport error.
        """
        pass

    @property
    @abstractmethod
    def gateway_name(self) -> str:
        pass


class SimulatedGateway(BaseGateway):
    """
    Stand-in for a real processor: random latency, configurable error rate.
    Subclasses only shape the response.
    """

    reference_prefix = "gw"

    def __init__(self, latency_max: float = None, error_rate: float = None):
        settings = get_settings()
        self.latency_max = (
            settings.GATEWAY_LATENCY_MAX_SECONDS if latency_max is None else latency_max
        )
        self.error_rate = settings.GATEWAY_ERROR_RATE if error_rate is None else error_rate

    async def charge(self, amount, currency, method, metadata):
        if self.latency_max > 0:
            await asyncio.sleep(random.uniform(0, self.latency_max))

        if random.random() < self.error_rate:
            raise GatewayFailure(
                f"{self.gateway_name}: 503 Service Unavailable", gateway=self.gateway_name
            )

        reference = f"{self.reference_prefix}_{random.randint(10**9, 10**10 - 1)}"
        response = self._response(reference, Decimal(amount), currency, method, metadata)
        response["gateway_transaction_id"] = reference
        return response

    @abstractmethod
    def _response(self, reference, amount, currency, method, metadata) -> Dict[str, Any]:
        pass
