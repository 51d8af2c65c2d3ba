from typing import Annotated, Optional
from fastapi import Depends, HTTPException, status, Header

from common.core.exceptions import AuthRequired
from common.core.otel_axiom_exporter import trace_span, get_logger
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.auth.providers.factory import get_identity_provider
from packages.users.services.user_service import UserService

logger = get_logger(__name__)


def get_user_service() -> UserService:
    """Get UserService instance."""
    return UserService()


@trace_span
async def get_optional_user(
    authorization: Annotated[Optional[str], Header()] = None,
    user_service: UserService = Depends(get_user_service),
) -> Optional[AuthenticatedUser]:
    """Resolve the bearer token to a known user, or None when there is no session."""
    if not authorization or not authorization.startswith("Bearer "):
        return None

    token = authorization.split(" ", 1)[1]
    try:
        claims = await get_identity_provider().decode_token(token)
    except AuthRequired:
        return None

    user = await user_service.get_by_email(claims.email)
    if not user:
        logger.warning(
            "Valid session token for unknown user",
            extra={"sub": claims.sub},
        )
        return None

    return AuthenticatedUser(
        user_id=user.id,
        email=user.email,
        full_name=user.full_name or claims.name,
        auth_method=user.auth_method,
    )


@trace_span
async def get_current_user(
    current_user: Optional[AuthenticatedUser] = Depends(get_optional_user),
) -> AuthenticatedUser:
    """Get current authenticated user from the session token."""
    if current_user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return current_user


@trace_span
async def get_current_active_user(
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    """Get current active user."""
    logger.debug(f"Resolved user_id={current_user.user_id}")
    return current_user
