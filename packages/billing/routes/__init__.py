"""Billing API routes."""

from packages.billing.routes import payments

__all__ = ["payments"]
