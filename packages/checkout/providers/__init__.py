"""Checkout providers - host integrations behind interfaces."""
