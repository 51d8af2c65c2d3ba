"""User API routes."""

from packages.users.routes import subscription_status

__all__ = ["subscription_status"]
