from typing import Optional

import jwt
from pydantic import ValidationError

from common.core.config import settings
from common.core.exceptions import AuthRequired
from common.core.otel_axiom_exporter import trace_span, get_logger
from packages.auth.providers.interface import IdentityProviderInterface
from packages.auth.providers.models import IdentityClaims

logger = get_logger(__name__)


class JWTIdentityProvider(IdentityProviderInterface):
    """Validates HMAC-signed session JWTs shared with the web identity provider"""

    def __init__(self, secret: Optional[str] = None, algorithm: Optional[str] = None):
        self.secret = secret or settings.auth_token_secret
        self.algorithm = algorithm or settings.auth_token_algorithm

    @trace_span
    async def decode_token(self, token: str) -> IdentityClaims:
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired session token")
            raise AuthRequired("Session expired")
        except jwt.InvalidTokenError as e:
            logger.warning(f"Rejected invalid session token: {e}")
            raise AuthRequired("Invalid session token")

        try:
            return IdentityClaims.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"Session token missing identity claims: {e}")
            raise AuthRequired("Invalid session token")
