"""
Razorpay implementation of the payment provider.

Talks to the Orders REST API with HTTP basic auth (key id, key secret).
"""

from typing import Dict, Optional
from urllib.parse import quote

import httpx

from common.core.config import settings
from common.core.exceptions import GatewayUnavailable
from common.core.otel_axiom_exporter import trace_span, get_logger
from packages.billing.models.domain.order import GatewayOrder, PaymentProof
from packages.billing.providers.payment.interface import PaymentProviderInterface
from packages.billing.providers.payment.signature import signature_matches

logger = get_logger(__name__)


class RazorpayPaymentProvider(PaymentProviderInterface):
    """Razorpay-based payment implementation."""

    def __init__(
        self,
        key_id: Optional[str] = None,
        key_secret: Optional[str] = None,
        api_base: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.key_id = key_id if key_id is not None else settings.gateway_key_id
        self.key_secret = (
            key_secret if key_secret is not None else settings.gateway_key_secret
        )
        self.api_base = (api_base or settings.gateway_api_base).rstrip("/")
        self.timeout = settings.gateway_timeout_seconds
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.key_id and self.key_secret)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.api_base,
            auth=(self.key_id, self.key_secret),
            timeout=self.timeout,
            transport=self._transport,
        )

    @trace_span
    async def create_order(
        self,
        amount: int,
        currency: str,
        receipt: str,
        notes: Dict[str, str],
    ) -> GatewayOrder:
        """
        Create a Razorpay order.

        Args:
            amount: Amount in minor units
            currency: ISO-4217 currency code
            receipt: Receipt tag (max 40 chars)
            notes: Order notes

        Returns:
            GatewayOrder with the id Razorpay assigned
        """
        if not self.is_configured:
            logger.error("Razorpay credentials are not configured")
            raise GatewayUnavailable("Payment gateway is not configured")

        payload = {
            "amount": amount,
            "currency": currency,
            "receipt": receipt,
            "notes": notes,
        }

        try:
            async with self._client() as client:
                response = await client.post("/orders", json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Failed to contact Razorpay: {e}")
            raise GatewayUnavailable("Failed to contact payment gateway") from e

        if response.status_code >= 400:
            logger.error(
                f"Razorpay rejected order: HTTP {response.status_code}",
                extra={"status_code": response.status_code, "receipt": receipt},
            )
            raise GatewayUnavailable("Unable to create order right now")

        try:
            order = GatewayOrder.model_validate(response.json())
        except ValueError as e:
            logger.error(f"Invalid order response from Razorpay: {e}")
            raise GatewayUnavailable("Invalid response from payment gateway") from e

        logger.info(
            "Created Razorpay order",
            extra={"order_id": order.id, "amount": order.amount, "receipt": receipt},
        )
        return order

    @trace_span
    async def fetch_order(self, order_id: str) -> Optional[GatewayOrder]:
        """Fetch an order with the amount, currency and notes Razorpay holds for it."""
        if not self.is_configured:
            logger.error("Razorpay credentials are not configured")
            raise GatewayUnavailable("Payment gateway is not configured")

        try:
            async with self._client() as client:
                response = await client.get(f"/orders/{quote(order_id, safe='')}")
        except httpx.HTTPError as e:
            logger.error(f"Failed to contact Razorpay: {e}")
            raise GatewayUnavailable("Failed to contact payment gateway") from e

        if response.status_code in (400, 404):
            logger.warning(
                f"Razorpay does not know order {order_id}",
                extra={"status_code": response.status_code, "order_id": order_id},
            )
            return None
        if response.status_code >= 400:
            logger.error(
                f"Razorpay order lookup failed: HTTP {response.status_code}",
                extra={"status_code": response.status_code, "order_id": order_id},
            )
            raise GatewayUnavailable("Unable to confirm order right now")

        try:
            return GatewayOrder.model_validate(response.json())
        except ValueError as e:
            logger.error(f"Invalid order response from Razorpay: {e}")
            raise GatewayUnavailable("Invalid response from payment gateway") from e

    def verify_payment_signature(self, proof: PaymentProof) -> bool:
        if not self.key_secret:
            raise GatewayUnavailable("Payment gateway is not configured")
        return signature_matches(
            self.key_secret,
            proof.gateway_order_id,
            proof.gateway_payment_id,
            proof.gateway_signature,
        )

    @trace_span
    async def health_check(self) -> bool:
        if not self.is_configured:
            return False
        try:
            async with self._client() as client:
                response = await client.get("/orders", params={"count": 1})
            return response.status_code < 400
        except httpx.HTTPError as e:
            logger.warning(f"Razorpay health check failed: {e}")
            return False
