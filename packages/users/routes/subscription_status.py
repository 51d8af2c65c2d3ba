"""
User subscription status route.

Backs the client-side subscription cache and the confirmation page re-check.
"""

from fastapi import APIRouter, Depends

from packages.auth.dependencies import get_current_active_user
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.billing.models.schemas.payments import (
    SubscriptionResponse,
    SubscriptionStatusResponse,
)
from packages.billing.services.subscription_service import SubscriptionService

router = APIRouter()


def get_subscription_service() -> SubscriptionService:
    return SubscriptionService()


@router.get("/subscription-status", response_model=SubscriptionStatusResponse)
async def get_subscription_status(
    current_user: AuthenticatedUser = Depends(get_current_active_user),
    subscription_service: SubscriptionService = Depends(get_subscription_service),
):
    """Whether the current user is a paid subscriber."""
    view = await subscription_service.get_status(current_user.user_id)

    subscription = None
    if view.subscription:
        subscription = SubscriptionResponse(
            id=view.subscription.id,
            plan_id=view.subscription.plan_id,
            status=view.subscription.status,
            start_date=view.subscription.start_date,
            end_date=view.subscription.end_date,
            auto_renew=view.subscription.auto_renew,
        )
    return SubscriptionStatusResponse(is_paid=view.is_paid, subscription=subscription)
