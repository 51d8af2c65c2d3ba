"""Factory for the singleton identity provider."""

from typing import Optional

from packages.auth.providers.interface import IdentityProviderInterface
from packages.auth.providers.jwt_provider import JWTIdentityProvider

_identity_provider: Optional[IdentityProviderInterface] = None


def get_identity_provider() -> IdentityProviderInterface:
    """Get or create the identity provider instance."""
    global _identity_provider
    if _identity_provider is None:
        _identity_provider = JWTIdentityProvider()
    return _identity_provider
