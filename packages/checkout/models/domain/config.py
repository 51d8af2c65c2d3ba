"""Checkout configuration handed to the orchestrator."""

from pydantic import BaseModel, Field

from common.core.config import settings


class CheckoutConfig(BaseModel):
    """Client-visible checkout settings. Never carries the gateway secret."""

    api_base_url: str
    gateway_key_id: str = ""
    receipt_prefix: str = "opensox"
    display_name: str = "Opensox Pro"
    description: str = "Payment"
    image_url: str = "https://opensox.ai/assets/logo.svg"
    theme_color: str = "#a472ea"
    button_text: str = "Invest"
    confirmation_path: str = "/checkout"
    fallback_path: str = "/pricing"
    login_path: str = "/login"
    cache_refresh_timeout_ms: int = Field(default=3000, gt=0)

    @property
    def gateway_available(self) -> bool:
        return bool(self.gateway_key_id)

    @classmethod
    def from_settings(cls) -> "CheckoutConfig":
        return cls(
            api_base_url=settings.checkout_api_base_url,
            gateway_key_id=settings.gateway_key_id,
            receipt_prefix=settings.checkout_receipt_prefix,
            display_name=settings.checkout_display_name,
            description=settings.checkout_description,
            image_url=settings.checkout_image_url,
            theme_color=settings.checkout_theme_color,
            button_text=settings.checkout_button_text,
            confirmation_path=settings.checkout_confirmation_path,
            fallback_path=settings.checkout_fallback_path,
            login_path=settings.checkout_login_path,
            cache_refresh_timeout_ms=settings.cache_refresh_timeout_ms,
        )
