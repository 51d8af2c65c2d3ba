"""Cache key generators for billing package."""


def subscription_status_by_user_key(user_id: int) -> str:
    """Generate cache key for the subscription status of a user."""
    return f"user:{user_id}:subscription"
