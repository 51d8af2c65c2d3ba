"""Interface for the client's identity/session source."""

from abc import ABC, abstractmethod

from packages.checkout.models.domain.identity import IdentitySession


class IdentityProviderInterface(ABC):
    """Supplies the current session: authenticated, loading, or none."""

    @abstractmethod
    async def get_session(self) -> IdentitySession:
        pass
