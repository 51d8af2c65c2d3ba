from typing import Optional, List
from pydantic_settings import BaseSettings, SettingsConfigDict

from common.core.constants import CacheProviderType, Environment


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Environment Profile
    environment: Environment = Environment.LOCAL

    # API Settings
    app_name: str = "subscriptions-api"
    api_version: str = "v1"
    debug: bool = False

    # Database Components
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "subscriptions"
    db_url: Optional[str] = None  # Full async URL override (e.g. sqlite+aiosqlite)
    db_use_nullpool: bool = False
    db_pool_size: int = 10
    db_pool_overflow: int = 5

    @property
    def database_url(self) -> str:
        """Construct database URL from components."""
        if self.db_url:
            return self.db_url
        return f"postgresql://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    # Redis
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: Optional[str] = None
    redis_db: int = 0

    @property
    def redis_connection_url(self) -> str:
        """Construct Redis URL from components."""
        if self.redis_password:
            return f"redis://:{self.redis_password}@{self.redis_host}:{self.redis_port}/{self.redis_db}"
        else:
            return f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"

    # Caching
    cache_provider: CacheProviderType = CacheProviderType.MEMORY
    subscription_status_cache_ttl: int = 300

    # Rate limiting
    rate_limit_storage_uri: Optional[str] = None  # Defaults to in-memory storage
    rate_limit_default: List[str] = ["10/second", "300/minute"]

    # OpenTelemetry
    otel_service_name: str = "subscriptions-api"
    otel_service_version: str = "0.1.0"

    # Axiom (export disabled when no token is configured)
    axiom_token: str = ""
    axiom_dataset: str = ""

    # Identity tokens issued by the auth provider
    auth_token_secret: str = "local-development-session-secret-change-me"
    auth_token_algorithm: str = "HS256"

    # Payment gateway (Razorpay-compatible orders API)
    gateway_key_id: str = ""  # Public key, also handed to the checkout surface
    gateway_key_secret: str = ""
    gateway_api_base: str = "https://api.razorpay.com/v1"
    gateway_timeout_seconds: float = 15.0

    # Checkout client
    checkout_api_base_url: str = "http://localhost:8000/api/v1"
    checkout_receipt_prefix: str = "opensox"
    checkout_display_name: str = "Opensox Pro"
    checkout_description: str = "Payment"
    checkout_image_url: str = "https://opensox.ai/assets/logo.svg"
    checkout_theme_color: str = "#a472ea"
    checkout_button_text: str = "Invest"
    checkout_confirmation_path: str = "/checkout"
    checkout_fallback_path: str = "/pricing"
    checkout_login_path: str = "/login"
    cache_refresh_timeout_ms: int = 3000

    @property
    def gateway_configured(self) -> bool:
        """Server-side gateway credentials are present."""
        return bool(self.gateway_key_id and self.gateway_key_secret)

    @property
    def cors_allowed_origins(self) -> List[str]:
        """Auto-select CORS origins based on environment."""
        if self.environment == Environment.LOCAL:
            return [
                "http://localhost:3000",
                "http://localhost:3001",
            ]
        return [
            "https://opensox.ai",
            "https://www.opensox.ai",
        ]


settings = Settings()
