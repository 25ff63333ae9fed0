"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Callable
from pathlib import Path
from typing import Any

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.database.models import Base
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.github.client import GitHubClient


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory, one shared connection)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_SECRET = "test-secret-key"

# Minimum cost bcrypt accepts; keeps registration fast
TEST_BCRYPT_ROUNDS = 4


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a test database engine with fresh tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """Unit of Work factory bound to the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key=TEST_SECRET,
        algorithm="HS256",
        expire_seconds=3600,
    )


def github_handler(request: httpx.Request) -> httpx.Response:
    """Fake GitHub: ``octocat`` has two repos, everyone else is unknown."""
    if request.url.path == "/users/octocat/repos":
        return httpx.Response(
            200,
            json=[
                {"id": 1, "name": "hello-world", "html_url": "https://github.com/octocat/hello-world"},
                {"id": 2, "name": "spoon-knife", "html_url": "https://github.com/octocat/spoon-knife"},
            ],
        )
    return httpx.Response(404, json={"message": "Not Found"})


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    auth_provider: JWTAuthProvider,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client wired to the in-memory database.

    This client:
    - Uses an in-memory SQLite database
    - Signs and verifies tokens with the test secret
    - Answers GitHub requests from a mock transport
    """
    from api.dependencies.auth import get_auth_provider
    from api.dependencies.services import (
        get_auth_service,
        get_post_service,
        get_profile_service,
    )
    from domain.services.auth_service import AuthService
    from domain.services.post_service import PostService
    from domain.services.profile_service import ProfileService
    from infrastructure.database.session import get_async_session
    from main import create_app

    app = create_app()

    github = GitHubClient(
        base_url="https://api.github.test",
        token="",
        timeout=5.0,
        transport=httpx.MockTransport(github_handler),
    )

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_auth_service] = lambda: AuthService(
        uow_factory, auth_provider, bcrypt_rounds=TEST_BCRYPT_ROUNDS
    )
    app.dependency_overrides[get_profile_service] = lambda: ProfileService(
        uow_factory, github_client=github
    )
    app.dependency_overrides[get_post_service] = lambda: PostService(uow_factory)

    async def override_get_async_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_get_async_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


async def register_and_login(
    client: AsyncClient,
    email: str = "a@x.com",
    name: str = "Ann",
    password: str = "secret1",
) -> dict[str, str]:
    """Register a user and return the auth headers for them."""
    response = await client.post(
        "/api/users", json={"name": name, "email": email, "password": password}
    )
    assert response.status_code == 200, response.text
    response = await client.post("/api/auth", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"x-auth-token": response.json()["token"]}


@pytest.fixture
async def auth_headers(client: AsyncClient) -> dict[str, str]:
    """Auth headers for a freshly registered user."""
    return await register_and_login(client)
