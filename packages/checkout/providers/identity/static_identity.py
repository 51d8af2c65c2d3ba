"""Identity provider holding a session set by the host application."""

from typing import Optional

from packages.checkout.models.domain.identity import IdentitySession
from packages.checkout.providers.identity.interface import IdentityProviderInterface


class StaticIdentityProvider(IdentityProviderInterface):
    """Returns whatever session the host last stored; loading until then."""

    def __init__(self, session: Optional[IdentitySession] = None):
        self._session = session or IdentitySession.loading()

    def set_session(self, session: IdentitySession) -> None:
        self._session = session

    async def get_session(self) -> IdentitySession:
        return self._session
