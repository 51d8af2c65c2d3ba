"""
Interface for payment gateways.

Abstracts order creation and checkout proof verification away from a
specific gateway.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional

from packages.billing.models.domain.order import GatewayOrder, PaymentProof


class PaymentProviderInterface(ABC):
    """Abstract interface for payment gateways."""

    @abstractmethod
    async def create_order(
        self,
        amount: int,
        currency: str,
        receipt: str,
        notes: Dict[str, str],
    ) -> GatewayOrder:
        """
        Create an order (payment intent) at the gateway.

        Args:
            amount: Amount in minor units, taken from the plan
            currency: ISO-4217 currency code
            receipt: Client receipt tag, best-effort unique
            notes: Opaque metadata stored with the order

        Returns:
            The gateway order

        Raises:
            GatewayUnavailable: Gateway unconfigured, unreachable or refused the order
        """
        pass

    @abstractmethod
    async def fetch_order(self, order_id: str) -> Optional[GatewayOrder]:
        """
        Look up an order as the gateway recorded it.

        Args:
            order_id: Gateway order id

        Returns:
            The order, or None if the gateway does not know it

        Raises:
            GatewayUnavailable: Gateway unconfigured or unreachable
        """
        pass

    @abstractmethod
    def verify_payment_signature(self, proof: PaymentProof) -> bool:
        """
        Check the checkout signature against the shared secret.

        Args:
            proof: Order id, payment id and signature from the checkout surface

        Returns:
            True only if the signature matches
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the gateway is configured and reachable.

        Returns:
            True if healthy, False otherwise
        """
        pass
