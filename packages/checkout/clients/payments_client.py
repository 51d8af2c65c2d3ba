"""
HTTP client for the checkout RPCs.

Calls the back-end with the user's bearer token and maps error responses
onto the application exception hierarchy.
"""

from typing import Any, Dict, Optional, Type

import httpx

from common.core.exceptions import (
    AppException,
    AuthRequired,
    GatewayUnavailable,
    OrderCreationFailed,
    PlanNotFound,
    VerificationFailed,
)
from common.core.otel_axiom_exporter import trace_span, get_logger, inject_trace_context
from packages.billing.models.schemas.payments import (
    CreateOrderRequest,
    CreateOrderResponse,
    SubscriptionStatusResponse,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from packages.checkout.models.domain.checkout import GatewaySuccess
from packages.checkout.models.domain.identity import IdentitySession

logger = get_logger(__name__)


class PaymentsClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _headers(self, identity: IdentitySession) -> Dict[str, str]:
        if not identity.is_authenticated:
            raise AuthRequired("Sign in to continue")
        headers = inject_trace_context()
        headers["Authorization"] = f"Bearer {identity.access_token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        identity: IdentitySession,
        step_error: Type[AppException],
        json: Optional[Dict[str, Any]] = None,
        plan_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        headers = self._headers(identity)
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(method, path, json=json, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise step_error(f"Request to {path} failed") from e

        if response.status_code == 401:
            raise AuthRequired("Session expired, sign in again")
        if response.status_code == 404 and plan_id:
            raise PlanNotFound(plan_id)
        if response.status_code == 503:
            raise GatewayUnavailable(_detail(response))
        if response.status_code >= 400:
            logger.error(
                f"{method} {path} returned HTTP {response.status_code}",
                extra={"status_code": response.status_code, "path": path},
            )
            raise step_error(_detail(response))
        return response.json()

    @trace_span
    async def create_order(
        self,
        identity: IdentitySession,
        plan_id: str,
        receipt: str,
        notes: Optional[Dict[str, str]] = None,
    ) -> CreateOrderResponse:
        request = CreateOrderRequest(plan_id=plan_id, receipt=receipt, notes=notes or {})
        data = await self._request(
            "POST",
            "/payments/orders",
            identity,
            OrderCreationFailed,
            json=request.model_dump(by_alias=True),
            plan_id=plan_id,
        )
        return CreateOrderResponse.model_validate(data)

    @trace_span
    async def verify_payment(
        self, identity: IdentitySession, result: GatewaySuccess, plan_id: str
    ) -> VerifyPaymentResponse:
        request = VerifyPaymentRequest(
            gateway_payment_id=result.gateway_payment_id,
            gateway_order_id=result.gateway_order_id,
            gateway_signature=result.gateway_signature,
            plan_id=plan_id,
        )
        data = await self._request(
            "POST",
            "/payments/verify",
            identity,
            VerificationFailed,
            json=request.model_dump(by_alias=True),
            plan_id=plan_id,
        )
        response = VerifyPaymentResponse.model_validate(data)
        if not response.ok:
            raise VerificationFailed("Payment verification was rejected")
        return response

    @trace_span
    async def get_subscription_status(
        self, identity: IdentitySession
    ) -> SubscriptionStatusResponse:
        data = await self._request(
            "GET", "/users/subscription-status", identity, AppException
        )
        return SubscriptionStatusResponse.model_validate(data)


def _detail(response: httpx.Response) -> str:
    try:
        detail = response.json().get("detail")
    except (ValueError, AttributeError):
        detail = None
    return str(detail or f"HTTP {response.status_code}")
