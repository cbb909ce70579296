"""Shared fixtures: in-memory database, seeded users, tokens and an HTTP client"""
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from panel_api.core.security import create_access_token
from panel_api.db.base import Base
from panel_api.db.models.user import User
from panel_api.db.session import get_db
from panel_api.main import app
from panel_api.services.user_service import UserService

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool
)
TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

ADMIN_PASSWORD = "admin-password"
MEMBER_PASSWORD = "member-password"


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def make_user(service: UserService, username: str, email: str, password: str, scopes: str = "") -> User:
    user = User(username=username, email=email, scopes=scopes)
    user.set_password(password)
    return service.create(user)


def bearer(scopes):
    token = create_access_token({"sub": "admin", "scopes": list(scopes)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def user_service(db_session):
    return UserService(db_session)


@pytest.fixture
def seeded_users(user_service):
    admin = make_user(user_service, "admin", "admin@example.com", ADMIN_PASSWORD, "users.view users.edit")
    member = make_user(user_service, "member", "member@example.com", MEMBER_PASSWORD, "users.view")
    return admin, member


@pytest.fixture
def edit_headers():
    return bearer(["users.view", "users.edit"])


@pytest.fixture
def view_headers():
    return bearer(["users.view"])


@pytest_asyncio.fixture
async def client(db_session):
    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
