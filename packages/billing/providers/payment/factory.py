"""
Factory for getting payment provider instance.
"""

from packages.billing.providers.payment.interface import PaymentProviderInterface
from packages.billing.providers.payment.razorpay_payment import RazorpayPaymentProvider


def get_payment_provider() -> PaymentProviderInterface:
    """
    Get payment provider instance based on configuration.

    Razorpay is the only gateway today; credentials come from settings.

    Returns:
        PaymentProviderInterface: Configured payment provider
    """
    return RazorpayPaymentProvider()
