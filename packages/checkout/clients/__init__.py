from packages.checkout.clients.payments_client import PaymentsClient

__all__ = ["PaymentsClient"]
