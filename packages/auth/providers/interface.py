from abc import ABC, abstractmethod

from packages.auth.providers.models import IdentityClaims


class IdentityProviderInterface(ABC):
    """Interface for resolving session tokens into identity claims"""

    @abstractmethod
    async def decode_token(self, token: str) -> IdentityClaims:
        """
        Validate a session token and return its claims.

        Raises:
            AuthRequired: If the token is invalid or expired
        """
        pass
