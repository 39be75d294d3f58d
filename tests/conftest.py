"""Pytest configuration and fixtures."""

import asyncio
import os
import tempfile
import uuid
from pathlib import Path

# Settings and the engine are built at import time, so the test
# environment has to be in place before anything from backend is imported.
_TEST_DIR = Path(tempfile.mkdtemp(prefix="hala-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR / 'test.db'}"
os.environ["ENVIRONMENT"] = "test"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOGIN_FAILURE_DELAY_MIN_MS"] = "0"
os.environ["LOGIN_FAILURE_DELAY_MAX_MS"] = "0"
os.environ["ADMIN_SEED_SECRET"] = "test-seed-secret"
os.environ["CORS_ORIGINS"] = ""

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import select  # noqa: E402
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware  # noqa: E402

from backend.app.db.base import AsyncSessionLocal, Base, engine  # noqa: E402
from backend.app.main import app  # noqa: E402
from backend.app.models import Admin, AdminRole, Celebrity, Vote  # noqa: E402
from backend.app.schemas.token import TokenSubject  # noqa: E402
from backend.app.security import hashing  # noqa: E402
from backend.app.security.fingerprint import hash_device_fingerprint  # noqa: E402
from backend.app.security.jwt import token_service  # noqa: E402

ADMIN_PASSWORD = "Str0ng!Pass"
FINGERPRINT = "f1" * 20


class FakeClock:
    """Stands in for time.time() so windows can expire instantly."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


async def reset_database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


async def create_celebrity(name="Test Celebrity", is_active=True, category="content_creator"):
    async with AsyncSessionLocal() as db:
        celebrity = Celebrity(
            name=name,
            image="/demo.jpg",
            description="A content creator taking part in the vote.",
            category=category,
            social_links=[{"platform": "instagram", "url": "https://instagram.com/test"}],
            is_active=is_active,
        )
        db.add(celebrity)
        await db.commit()
        return celebrity.id


async def create_admin(username="editor", password=ADMIN_PASSWORD, role=AdminRole.ADMIN, is_active=True):
    async with AsyncSessionLocal() as db:
        admin = Admin(
            username=username.lower(),
            password_hash=hashing.get_password_hash(password),
            display_name=username.title(),
            role=role,
            is_active=is_active,
            login_attempts=0,
        )
        db.add(admin)
        await db.commit()
        return admin.id


async def fetch_admin(username):
    async with AsyncSessionLocal() as db:
        result = await db.execute(select(Admin).where(Admin.username == username.lower()))
        return result.scalars().first()


async def update_admin(username, **fields):
    async with AsyncSessionLocal() as db:
        result = await db.execute(select(Admin).where(Admin.username == username.lower()))
        admin = result.scalars().first()
        for key, value in fields.items():
            setattr(admin, key, value)
        await db.commit()


async def add_vote(celebrity_id, fingerprint, ip="10.0.0.1", salt="hala-baghdad-vote"):
    async with AsyncSessionLocal() as db:
        db.add(
            Vote(
                celebrity_id=celebrity_id,
                device_fingerprint=hash_device_fingerprint(fingerprint, ip, salt),
                ip_address=ip,
            )
        )
        await db.commit()


# ─────────────────────────────────────────────────────────────
# HTTP level (sync, TestClient)
# ─────────────────────────────────────────────────────────────

@pytest.fixture
def client():
    """
    App behind a trusted reverse proxy.

    The TestClient peer ("testclient") is trusted the way
    FORWARDED_ALLOW_IPS trusts a real proxy, so X-Forwarded-For sets the
    client address. Fresh database and rate limiters for every test.
    """
    asyncio.run(reset_database())
    with TestClient(ProxyHeadersMiddleware(app, trusted_hosts="testclient")) as test_client:
        yield test_client


@pytest.fixture
def direct_client():
    """App reached directly: forwarding headers come from an untrusted peer."""
    asyncio.run(reset_database())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_celebrity():
    def factory(**kwargs):
        return asyncio.run(create_celebrity(**kwargs))
    return factory


@pytest.fixture
def make_admin():
    def factory(**kwargs):
        return asyncio.run(create_admin(**kwargs))
    return factory


@pytest.fixture
def get_admin():
    def getter(username):
        return asyncio.run(fetch_admin(username))
    return getter


@pytest.fixture
def set_admin():
    def setter(username, **fields):
        asyncio.run(update_admin(username, **fields))
    return setter


@pytest.fixture
def session_headers():
    """Cookie header carrying a freshly signed token, no login round trip."""
    def factory(role="admin", token_type="access", cookie="access_token", user_id=None):
        subject = TokenSubject(user_id=user_id or uuid.uuid4(), username="tester", role=role)
        if token_type == "access":
            token = token_service.issue_access(subject)
        else:
            token = token_service.issue_refresh(subject)
        return {"Cookie": f"{cookie}={token}"}
    return factory


# ─────────────────────────────────────────────────────────────
# Service level (async)
# ─────────────────────────────────────────────────────────────

@pytest.fixture
async def database():
    await reset_database()
    yield


@pytest.fixture
async def db_session(database):
    async with AsyncSessionLocal() as session:
        yield session
