"""Cache key generators for users package repositories."""


def user_by_email_key(email: str) -> str:
    """Generate cache key for user by email."""
    return f"user:email:{email.lower()}"
