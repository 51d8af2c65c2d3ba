# Shared pytest configuration and fixtures for all test types
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from slowapi import Limiter
from slowapi.util import get_remote_address
from unittest.mock import patch

# Create test limiter with no limits and in-memory storage
test_limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[],
    storage_uri="memory://",
)

# Patch the limiter before importing the app so decorators use test limiter
with patch("common.providers.rate_limiter.limiter.limiter", test_limiter):
    from api.main import app

from common.core.config import settings
from common.db.session import get_db
from common.db.base import Base
from common.providers.caching.factory import reset_cache_provider
from packages.auth.dependencies import get_current_active_user
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.billing.models.database.plan import PlanEntity
from packages.billing.models.database.subscription import SubscriptionEntity
from packages.billing.models.database.payment import PaymentEntity  # noqa: F401
from packages.billing.models.domain.enums import PlanInterval, SubscriptionStatus
from packages.billing.providers.payment.signature import compute_checkout_signature
from packages.users.models.database.user import UserEntity
from datetime import datetime, timezone, timedelta

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_GATEWAY_KEY_ID = "rzp_test_key"
TEST_GATEWAY_KEY_SECRET = "rzp_test_secret"
TEST_PLAN_ID = "385b8215-d70f-473e-81c9-68a673c0d2fc-test"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine and initialize schema."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_connection(test_engine):
    """Create test connection with outer transaction for rollback isolation."""
    async with test_engine.connect() as connection:
        trans = await connection.begin()
        yield connection
        await trans.rollback()


@pytest_asyncio.fixture(scope="function")
async def test_session_factory(test_connection):
    """Create session factory bound to test connection.

    Using join_transaction_mode="create_savepoint" so commits and rollbacks
    inside transaction() only touch a savepoint of the outer test transaction.
    """
    return async_sessionmaker(
        bind=test_connection,
        class_=AsyncSession,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )


@pytest_asyncio.fixture(scope="function")
async def test_db(test_session_factory):
    """Create a test database session."""
    async with test_session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function", autouse=True)
async def patch_lazy_sessions(test_session_factory, monkeypatch):
    """
    Patch session factories to use test database.

    This allows real transaction() and get_session() to run with proper
    commit/rollback/ContextVar semantics while using the test database.
    """
    monkeypatch.setattr("common.db.scoped.AsyncSessionLocal", test_session_factory)
    monkeypatch.setattr(
        "common.db.scoped.AsyncSessionLocalReadonly", test_session_factory
    )


@pytest.fixture(autouse=True)
def fresh_cache_provider():
    """Start every test with an empty in-memory cache."""
    reset_cache_provider()
    yield
    reset_cache_provider()


@pytest.fixture
def gateway_credentials(monkeypatch):
    """Configure test gateway credentials on the global settings."""
    monkeypatch.setattr(settings, "gateway_key_id", TEST_GATEWAY_KEY_ID)
    monkeypatch.setattr(settings, "gateway_key_secret", TEST_GATEWAY_KEY_SECRET)
    return TEST_GATEWAY_KEY_ID, TEST_GATEWAY_KEY_SECRET


@pytest.fixture
def sign_checkout():
    """Sign an (order_id, payment_id) pair the way the gateway does."""

    def _sign(order_id: str, payment_id: str) -> str:
        return compute_checkout_signature(TEST_GATEWAY_KEY_SECRET, order_id, payment_id)

    return _sign


@pytest_asyncio.fixture(scope="function")
async def client(test_db: AsyncSession, test_user):
    """Create a test client."""

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    def override_get_current_active_user():
        return test_user

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_active_user] = override_get_current_active_user

    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def anonymous_client(test_db: AsyncSession):
    """Test client without an authenticated user override."""

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def sample_user_entity(test_db: AsyncSession):
    """Create a sample user for testing."""
    user = UserEntity(
        email="test@example.com",
        full_name="Test User",
        auth_method="google",
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest_asyncio.fixture(scope="function")
async def other_user_entity(test_db: AsyncSession):
    """Create a second user for isolation tests."""
    user = UserEntity(
        email="other@example.com",
        full_name="Other User",
        auth_method="github",
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest_asyncio.fixture(scope="function")
async def test_user(sample_user_entity):
    """Create a test authenticated user."""
    return AuthenticatedUser(
        user_id=sample_user_entity.id,
        email=sample_user_entity.email,
        full_name=sample_user_entity.full_name,
        auth_method=sample_user_entity.auth_method,
    )


@pytest_asyncio.fixture(scope="function")
async def sample_plan(test_db: AsyncSession):
    """Create the yearly test plan."""
    plan = PlanEntity(
        id=TEST_PLAN_ID,
        name="Test Plan",
        interval=PlanInterval.YEARLY.value,
        price=100,
        currency="INR",
    )
    test_db.add(plan)
    await test_db.commit()
    await test_db.refresh(plan)
    return plan


@pytest_asyncio.fixture(scope="function")
async def monthly_plan(test_db: AsyncSession):
    """Create a monthly plan."""
    plan = PlanEntity(
        id="plan_monthly",
        name="Monthly Plan",
        interval=PlanInterval.MONTHLY.value,
        price=49900,
        currency="INR",
    )
    test_db.add(plan)
    await test_db.commit()
    await test_db.refresh(plan)
    return plan


@pytest_asyncio.fixture(scope="function")
async def sample_subscription(test_db: AsyncSession, sample_user_entity, sample_plan):
    """Create an active subscription for the sample user."""
    now = datetime.now(timezone.utc)
    subscription = SubscriptionEntity(
        user_id=sample_user_entity.id,
        plan_id=sample_plan.id,
        status=SubscriptionStatus.ACTIVE.value,
        start_date=now,
        end_date=now + timedelta(days=365),
        auto_renew=True,
    )
    test_db.add(subscription)
    await test_db.commit()
    await test_db.refresh(subscription)
    return subscription


@pytest_asyncio.fixture(scope="function")
async def expired_subscription(test_db: AsyncSession, sample_user_entity, sample_plan):
    """Create a subscription whose period has already ended."""
    now = datetime.now(timezone.utc)
    subscription = SubscriptionEntity(
        user_id=sample_user_entity.id,
        plan_id=sample_plan.id,
        status=SubscriptionStatus.ACTIVE.value,
        start_date=now - timedelta(days=400),
        end_date=now - timedelta(days=35),
        auto_renew=False,
    )
    test_db.add(subscription)
    await test_db.commit()
    await test_db.refresh(subscription)
    return subscription
