from packages.checkout.providers.identity.interface import IdentityProviderInterface
from packages.checkout.providers.identity.static_identity import (
    StaticIdentityProvider,
)

__all__ = ["IdentityProviderInterface", "StaticIdentityProvider"]
