class AppException(Exception):
    """Base application exception."""

    pass


class NotFoundError(AppException):
    """Resource not found exception."""

    pass


class ValidationError(AppException):
    """Validation error exception."""

    pass


class AuthRequired(AppException):
    """No resolved identity for an operation that needs one."""

    pass


class PlanNotFound(NotFoundError):
    """Requested plan does not exist."""

    def __init__(self, plan_id: str):
        self.plan_id = plan_id
        super().__init__(f"Plan {plan_id} not found")


class GatewayUnavailable(AppException):
    """Payment gateway is unconfigured or unreachable."""

    pass


class OrderCreationFailed(AppException):
    """Order could not be created for the checkout attempt."""

    pass


class PaymentFailed(AppException):
    """Gateway reported a failed payment."""

    pass


class VerificationFailed(AppException):
    """Signature mismatch or ledger commit failure."""

    pass


class PersistenceError(AppException):
    """Ledger write failed and was rolled back."""

    pass


class CacheRefreshTimeout(AppException):
    """Background cache refresh lost the race against its timeout."""

    def __init__(self, timeout_ms: int):
        self.timeout_ms = timeout_ms
        super().__init__(f"Subscription cache refresh exceeded {timeout_ms}ms")


class CheckoutInProgressError(AppException):
    """A checkout session is already in flight."""

    pass
