"""
Test Configuration and Fixtures
Provides shared test setup for all test cases
"""
import os

# Settings are read at import time, so the test environment must be in place first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENFORCE_ACCOUNT_STATUS"] = "false"

import sys
import uuid
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool
from app.main import app
from app.database.connection import Base
from app.services.auth_service import create_account
from app.services.property_service import create_property
from app.utils.security import create_access_token

# Test database URL (use in-memory SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Every module that opens sessions through AsyncSessionLocal
MODULES_TO_PATCH = [
    "app.services.auth_service",
    "app.services.account_service",
    "app.services.property_service",
    "app.services.enquiry_service",
    "app.services.page_service",
    "app.services.admin_dashboard_service",
    "app.database.connection",
]

ADMIN_PASSWORD = "AdminPass123!"
USER_PASSWORD = "UserPass123!"


def build_property_payload(**overrides) -> dict:
    payload = {
        "title": "Corner Plot in Sector B",
        "price": 2500000,
        "property_type": "plot",
        "location": "Sector B, Main Boulevard",
        "city": "Lahore",
        "area": 240.0,
        "features": ["corner", "park facing"],
        "description": "Ten marla corner plot",
        "images": [],
        "premium": False,
        "owner_contact": "+923001234567",
    }
    payload.update(overrides)
    return payload


def bearer(account: dict) -> dict:
    """Authorization header for an account dict"""
    token = create_access_token(account_id=account["id"], role=account["role"], email=account["email"])
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Fresh in-memory schema for each test"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def session_factory(test_engine, monkeypatch):
    """Session factory bound to the test engine, patched into the services"""
    factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    for module_name in MODULES_TO_PATCH:
        module = sys.modules.get(module_name)
        if module is not None and hasattr(module, "AsyncSessionLocal"):
            monkeypatch.setattr(module, "AsyncSessionLocal", factory)

    return factory


@pytest_asyncio.fixture(scope="function")
async def client(session_factory):
    """Create test HTTP client"""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture(scope="function")
async def admin_account(session_factory):
    account = await create_account(
        name="System Administrator",
        email="admin@example.com",
        password=ADMIN_PASSWORD,
        role="admin",
    )
    return account


@pytest_asyncio.fixture(scope="function")
async def user_account(session_factory):
    account = await create_account(
        name="Test User",
        email=f"user_{uuid.uuid4().hex[:10]}@example.com",
        password=USER_PASSWORD,
        phone="+923331234567",
    )
    return account


@pytest_asyncio.fixture(scope="function")
async def other_user_account(session_factory):
    account = await create_account(
        name="Another User",
        email=f"other_{uuid.uuid4().hex[:10]}@example.com",
        password=USER_PASSWORD,
    )
    return account


@pytest.fixture(scope="function")
def admin_headers(admin_account):
    return bearer(admin_account)


@pytest.fixture(scope="function")
def user_headers(user_account):
    return bearer(user_account)


@pytest.fixture(scope="function")
def property_payload():
    return build_property_payload


@pytest_asyncio.fixture(scope="function")
async def approved_property(admin_account):
    """A published listing created by the admin"""
    return await create_property(
        account_id=admin_account["id"],
        role="admin",
        property_data=build_property_payload(title="Approved Villa", slug="approved-villa", status="approved"),
    )


@pytest_asyncio.fixture(scope="function")
async def draft_property(user_account):
    """An unpublished listing owned by the regular user"""
    return await create_property(
        account_id=user_account["id"],
        role="user",
        property_data=build_property_payload(title="Draft House", slug="draft-house"),
    )


@pytest_asyncio.fixture(scope="function")
async def authenticated_admin(client: AsyncClient, admin_account):
    """Log the admin in through the API and keep the bearer token on the client"""
    resp = await client.post("/auth/admin/login", json={
        "email": admin_account["email"],
        "password": ADMIN_PASSWORD
    })
    assert resp.status_code == 200, resp.text

    token = resp.json()["token"]
    client.cookies.clear()
    client.headers.update({"Authorization": f"Bearer {token}"})

    return client, admin_account
