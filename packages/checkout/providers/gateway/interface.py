"""
Interface for the gateway's client-side checkout surface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Awaitable, Callable

from packages.checkout.models.domain.checkout import (
    CheckoutOptions,
    GatewayFailure,
    GatewaySuccess,
)


@dataclass(frozen=True)
class CheckoutHandlers:
    """Outcome channels for one checkout session. Exactly one fires."""

    on_success: Callable[[GatewaySuccess], Awaitable[None]]
    on_failure: Callable[[GatewayFailure], Awaitable[None]]
    on_dismiss: Callable[[], Awaitable[None]]


class CheckoutSurfaceInterface(ABC):
    """Third-party checkout UI (e.g. the Razorpay modal)."""

    @abstractmethod
    async def open(self, options: CheckoutOptions, handlers: CheckoutHandlers) -> None:
        """
        Open checkout and return once it is showing.

        The outcome is reported later through one of the handlers.

        Raises:
            Exception: The surface could not be loaded or opened
        """
        pass
