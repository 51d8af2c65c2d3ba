"""
Payment API routes.

Order creation and checkout verification for the authenticated user.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status

from common.core.exceptions import (
    GatewayUnavailable,
    NotFoundError,
    PersistenceError,
    ValidationError,
    VerificationFailed,
)
from common.core.otel_axiom_exporter import get_logger
from common.providers.rate_limiter.limiter import limiter
from packages.auth.dependencies import get_current_active_user
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.billing.models.domain.order import PaymentProof
from packages.billing.models.schemas.payments import (
    CreateOrderRequest,
    CreateOrderResponse,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from packages.billing.services.order_service import OrderService
from packages.billing.services.verification_service import VerificationService

router = APIRouter()
logger = get_logger(__name__)


def get_order_service() -> OrderService:
    return OrderService()


def get_verification_service() -> VerificationService:
    return VerificationService()


# ============================================================================
# Orders
# ============================================================================


@router.post("/orders", response_model=CreateOrderResponse)
@limiter.limit("20/minute")
async def create_order(
    request: Request,
    order_request: CreateOrderRequest,
    current_user: AuthenticatedUser = Depends(get_current_active_user),
    order_service: OrderService = Depends(get_order_service),
):
    """
    Create a gateway order for a plan.

    The amount is the plan's stored price; nothing priced by the client is used.
    """
    try:
        order = await order_service.create_order(
            user=current_user,
            plan_id=order_request.plan_id,
            receipt=order_request.receipt,
            notes=order_request.notes,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except GatewayUnavailable as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)
        )

    return CreateOrderResponse(
        order_id=order.id, amount=order.amount, currency=order.currency
    )


# ============================================================================
# Verification
# ============================================================================


@router.post("/verify", response_model=VerifyPaymentResponse)
@limiter.limit("20/minute")
async def verify_payment(
    request: Request,
    verify_request: VerifyPaymentRequest,
    current_user: AuthenticatedUser = Depends(get_current_active_user),
    verification_service: VerificationService = Depends(get_verification_service),
):
    """
    Verify a checkout result and activate the subscription.

    Safe to replay: the same gateway payment id never records a second payment.
    """
    proof = PaymentProof(
        gateway_payment_id=verify_request.gateway_payment_id,
        gateway_order_id=verify_request.gateway_order_id,
        gateway_signature=verify_request.gateway_signature,
    )
    try:
        result = await verification_service.verify(
            user_id=current_user.user_id,
            proof=proof,
            plan_id=verify_request.plan_id,
        )
    except (ValidationError, VerificationFailed) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except GatewayUnavailable as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)
        )
    except PersistenceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)
        )

    return VerifyPaymentResponse(
        ok=True,
        subscription_id=result.subscription_id,
        payment_id=result.payment_id,
    )
