"""
Centralized Test Configuration.
"""

import uuid
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event, update
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import Pool, StaticPool

from cort_backend.app.main import app
from cort_backend.app.db.session import get_db, Base
from cort_backend.app.core.dependencies import get_identity_provider
from cort_backend.app.core.identity import IdentityProvider, IdentityProviderError, IdentityResult
from cort_backend.app.models.company import Company
from cort_backend.app.models.enums import UserRole, UserStatus
from cort_backend.app.models.user import User
from cort_backend.app.models.vehicle import Vehicle
from cort_backend.app.models.vehicle_enums import OwnershipType, VehicleCategory

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@event.listens_for(Pool, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable foreign key constraints for SQLite."""
    if 'sqlite' in str(type(dbapi_conn)):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


# Fake identity provider for reliability in CI/CD
class FakeIdentityProvider(IdentityProvider):
    """
    In-memory stand-in for the identity provider.

    Tokens are opaque strings mapped to subject ids. The special token
    ``explode`` makes verification fail with an unexpected error.
    """

    def __init__(self):
        self.tokens = {}
        self.accounts = {}
        self.sign_up_calls = 0
        self.reject_sign_up = False
        self.closed = False

    def issue_token(self, subject_id: str) -> str:
        token = f"token-{uuid.uuid4().hex}"
        self.tokens[token] = subject_id
        return token

    def register(self, email: str, password: str, subject_id: str = None) -> str:
        subject_id = subject_id or str(uuid.uuid4())
        self.accounts[email] = (password, subject_id)
        return subject_id

    async def verify_token(self, token: str) -> str:
        if token == "explode":
            raise RuntimeError("provider connection reset")
        if token not in self.tokens:
            raise IdentityProviderError("invalid JWT")
        return self.tokens[token]

    async def sign_up(self, email: str, password: str) -> IdentityResult:
        self.sign_up_calls += 1
        if self.reject_sign_up:
            raise IdentityProviderError("Signups not allowed for this instance")
        if email in self.accounts:
            raise IdentityProviderError("User already registered")
        subject_id = self.register(email, password)
        return IdentityResult(subject_id=subject_id, session={"access_token": self.issue_token(subject_id)})

    async def sign_in(self, email: str, password: str) -> IdentityResult:
        account = self.accounts.get(email)
        if account is None or account[0] != password:
            raise IdentityProviderError("Invalid login credentials")
        subject_id = account[1]
        return IdentityResult(subject_id=subject_id, session={"access_token": self.issue_token(subject_id)})

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def identity_provider():
    return FakeIdentityProvider()


@pytest.fixture(autouse=True)
def apply_overrides(identity_provider):
    """Point the app at the test database and the fake identity provider."""

    async def override_get_db():
        async with TestingSessionLocal() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_provider] = lambda: identity_provider
    yield
    app.dependency_overrides = {}


@pytest.fixture(autouse=True)
async def setup_database():
    """Create tables before each test function and drop after."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client():
    """Async client for testing."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


# Shared session for fixture data creation
@pytest.fixture
async def db_session():
    async with TestingSessionLocal() as session:
        yield session


@pytest.fixture
def make_company(db_session):
    """Factory for companies."""
    async def _make(name: str = None, email: str = None, **kwargs) -> Company:
        suffix = uuid.uuid4().hex[:8]
        company = Company(
            name=name or f"Company {suffix}",
            email=email or f"contact-{suffix}@company.com",
            **kwargs
        )
        db_session.add(company)
        await db_session.commit()
        await db_session.refresh(company)
        return company
    return _make


@pytest.fixture
def make_user(db_session):
    """
    Factory for directory users.

    Pass ``status=None`` to store a NULL status.
    """
    async def _make(
        role: UserRole = UserRole.EMPLOYEE,
        company_id: int = None,
        status=UserStatus.ACTIVE.value,
        email: str = None,
        phone: str = None,
    ) -> User:
        user_id = str(uuid.uuid4())
        user = User(
            id=user_id,
            email=email or f"{role.value.lower()}-{user_id[:8]}@cort.com",
            full_name=f"{role.value.title()} User",
            phone=phone,
            role=role,
            company_id=company_id,
        )
        if status is not None:
            user.status = status
        db_session.add(user)
        await db_session.commit()

        if status is None:
            await db_session.execute(update(User).where(User.id == user_id).values(status=None))
            await db_session.commit()

        await db_session.refresh(user)
        return user
    return _make


@pytest.fixture
def make_vehicle(db_session):
    """Factory for vehicles; owner_company_id=None puts the vehicle in the platform fleet."""
    async def _make(owner_company_id: int = None, plate_number: str = None, **kwargs) -> Vehicle:
        values = {
            "make": "Toyota",
            "model": "Hiace",
            "year": 2022,
            "category": VehicleCategory.VAN,
            "ownership": OwnershipType.OWNED,
            "fuel_avg_city": 8.5,
            "fuel_avg_highway": 11.0,
        }
        values.update(kwargs)
        vehicle = Vehicle(
            plate_number=plate_number or f"LEA-{uuid.uuid4().hex[:6].upper()}",
            owner_company_id=owner_company_id,
            **values
        )
        db_session.add(vehicle)
        await db_session.commit()
        await db_session.refresh(vehicle)
        return vehicle
    return _make


@pytest.fixture
def auth_headers(identity_provider):
    """Build an Authorization header for a directory user."""
    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {identity_provider.issue_token(user.id)}"}
    return _headers
