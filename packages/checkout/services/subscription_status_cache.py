"""
Per-identity memo of the subscription status RPC.

Never authoritative: entries can always be re-fetched, and readers accept
that a value may be stale until the next refresh.
"""

from typing import Optional

from common.core.exceptions import AuthRequired
from common.core.otel_axiom_exporter import trace_span, get_logger
from common.providers.caching.factory import get_cache_provider
from common.providers.caching.interface import CacheInterface
from packages.billing.models.schemas.payments import SubscriptionStatusResponse
from packages.checkout.clients.payments_client import PaymentsClient
from packages.checkout.models.domain.identity import IdentitySession

logger = get_logger(__name__)


def subscription_status_by_identity_key(subject: str) -> str:
    return f"checkout:subscription_status:{subject}"


class SubscriptionStatusCache:
    def __init__(
        self,
        client: PaymentsClient,
        cache: Optional[CacheInterface] = None,
        ttl: int = 300,
    ):
        self.client = client
        self.cache = cache or get_cache_provider()
        self.ttl = ttl

    def _key(self, identity: IdentitySession) -> str:
        if not identity.is_authenticated or not identity.subject:
            raise AuthRequired("Subscription status needs a signed-in user")
        return subscription_status_by_identity_key(identity.subject)

    @trace_span
    async def get(self, identity: IdentitySession) -> SubscriptionStatusResponse:
        """Cached status, fetched on first use."""
        cached = await self.cache.get(self._key(identity))
        if cached is not None:
            return SubscriptionStatusResponse.model_validate(cached)
        return await self.refresh(identity)

    @trace_span
    async def invalidate(self, identity: IdentitySession) -> None:
        await self.cache.delete(self._key(identity))

    @trace_span
    async def refresh(self, identity: IdentitySession) -> SubscriptionStatusResponse:
        """Fetch from the back-end and store the result."""
        key = self._key(identity)
        status = await self.client.get_subscription_status(identity)
        await self.cache.set(key, status.model_dump(mode="json"), self.ttl)
        logger.debug(f"Refreshed subscription status, is_paid={status.is_paid}")
        return status
