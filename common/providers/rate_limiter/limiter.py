"""Global rate limiter instance for SlowAPI."""

from slowapi import Limiter
from slowapi.util import get_remote_address
from common.core.config import settings

# Payment endpoints are called once per checkout attempt, so the defaults only
# guard against scripted replays. Point storage at Redis in multi-pod deployments.
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=settings.rate_limit_default,
    storage_uri=settings.rate_limit_storage_uri or "memory://",
)
