"""Gateway checkout surface and the bridge that sequences its callbacks."""

from packages.checkout.providers.gateway.interface import (
    CheckoutHandlers,
    CheckoutSurfaceInterface,
)
from packages.checkout.providers.gateway.bridge import GatewayClientBridge

__all__ = ["CheckoutHandlers", "CheckoutSurfaceInterface", "GatewayClientBridge"]
