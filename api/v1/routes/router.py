from fastapi import APIRouter, Depends

from api.v1.routes import (
    health,
)
from packages.auth.dependencies import get_current_active_user
from packages.billing.routes import payments
from packages.users.routes import subscription_status

api_router = APIRouter()

# Health check (no auth required)
api_router.include_router(health.router, prefix="/health", tags=["health"])

# Checkout (require auth)
api_router.include_router(
    payments.router,
    prefix="/payments",
    tags=["payments"],
    dependencies=[Depends(get_current_active_user)],
)

# User subscription status (require auth)
api_router.include_router(
    subscription_status.router,
    prefix="/users",
    tags=["users"],
    dependencies=[Depends(get_current_active_user)],
)
