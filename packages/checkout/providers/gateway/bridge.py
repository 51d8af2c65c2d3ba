"""
Bridge between the checkout surface's callbacks and the orchestrator.

Allows a single checkout session at a time and delivers exactly one outcome
per session. Late or repeated callbacks from the surface are dropped.
"""

import itertools
from typing import Awaitable, Callable, Optional

from common.core.exceptions import CheckoutInProgressError
from common.core.otel_axiom_exporter import trace_span, get_logger
from packages.checkout.models.domain.checkout import (
    CheckoutOptions,
    GatewayFailure,
    GatewaySuccess,
)
from packages.checkout.providers.gateway.interface import (
    CheckoutHandlers,
    CheckoutSurfaceInterface,
)

logger = get_logger(__name__)


class GatewayClientBridge:
    def __init__(
        self,
        surface: CheckoutSurfaceInterface,
        on_success: Callable[[GatewaySuccess], Awaitable[None]],
        on_failure: Callable[[GatewayFailure], Awaitable[None]],
        on_dismiss: Callable[[], Awaitable[None]],
    ):
        self.surface = surface
        self._on_success = on_success
        self._on_failure = on_failure
        self._on_dismiss = on_dismiss
        self._session_ids = itertools.count(1)
        self._active_session: Optional[int] = None

    @property
    def in_flight(self) -> bool:
        return self._active_session is not None

    @trace_span
    async def initiate(self, options: CheckoutOptions) -> None:
        """
        Open a checkout session.

        Raises:
            CheckoutInProgressError: A session is already pending
        """
        if self._active_session is not None:
            raise CheckoutInProgressError(
                f"Checkout session {self._active_session} is still pending"
            )

        session_id = next(self._session_ids)
        self._active_session = session_id
        handlers = CheckoutHandlers(
            on_success=lambda result: self._settle(session_id, "success", result),
            on_failure=lambda failure: self._settle(session_id, "failure", failure),
            on_dismiss=lambda: self._settle(session_id, "dismiss", None),
        )

        try:
            await self.surface.open(options, handlers)
        except Exception:
            if self._active_session == session_id:
                self._active_session = None
            raise

        logger.info(
            f"Opened checkout session {session_id}",
            extra={"session_id": session_id, "order_id": options.order_id},
        )

    async def _settle(self, session_id: int, outcome: str, payload) -> None:
        if self._active_session != session_id:
            logger.warning(
                f"Ignoring {outcome} for finished checkout session {session_id}",
                extra={"session_id": session_id, "outcome": outcome},
            )
            return

        # Release before dispatch so the handler may start a new attempt
        self._active_session = None
        logger.info(
            f"Checkout session {session_id} settled: {outcome}",
            extra={"session_id": session_id, "outcome": outcome},
        )

        if outcome == "success":
            await self._on_success(payload)
        elif outcome == "failure":
            await self._on_failure(payload)
        else:
            await self._on_dismiss()
