"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any
from uuid import uuid4

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
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

from infrastructure.auth.jwt_resolver import JWTIdentityResolver
from infrastructure.auth.resolver import TokenUser
from infrastructure.database.models import Base, UserModel


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory, one connection shared by all sessions)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_SECRET_KEY = "test-secret-key"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database for each test, with foreign keys enforced."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

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
def test_user() -> TokenUser:
    """The main test user."""
    return TokenUser(id=uuid4(), email="ada@example.com", name="Ada Lovelace")


@pytest.fixture
def other_user() -> TokenUser:
    """A second user, for ownership checks."""
    return TokenUser(id=uuid4(), email="linus@example.com", name="Linus Torvalds")


@pytest.fixture
async def users_in_db(
    session_factory: async_sessionmaker[AsyncSession],
    test_user: TokenUser,
    other_user: TokenUser,
) -> None:
    """Provision both test users, as the identity provider would."""
    async with session_factory() as session:
        for user in (test_user, other_user):
            session.add(
                UserModel(
                    id=user.id,
                    email=user.email,
                    name=user.name,
                    avatar_url=f"https://avatars.example.com/{user.id}.png",
                )
            )
        await session.commit()


@pytest.fixture
def identity_resolver() -> JWTIdentityResolver:
    """Create identity resolver for testing."""
    return JWTIdentityResolver(
        secret_key=TEST_SECRET_KEY,
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def auth_headers(identity_resolver: JWTIdentityResolver, test_user: TokenUser) -> dict[str, str]:
    """Authorization headers carrying a real token for the test user."""
    return {"Authorization": f"Bearer {identity_resolver.issue_token(test_user)}"}


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth, no database overrides)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def client_factory(
    session_factory: async_sessionmaker[AsyncSession],
    identity_resolver: JWTIdentityResolver,
    users_in_db: None,
) -> Callable[[TokenUser | None], Any]:
    """
    Build test clients wired to the in-memory database.

    With a user, the auth dependency is overridden to return that user.
    Without one, real bearer tokens are verified by the test resolver.
    """
    from api.dependencies.auth import get_current_user, get_identity_resolver
    from api.v1.dependencies import get_post_service, get_profile_service
    from domain.services.post_service import PostService
    from domain.services.profile_service import ProfileService
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from main import create_app

    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    @asynccontextmanager
    async def make(user: TokenUser | None = None) -> AsyncGenerator[AsyncClient, None]:
        app = create_app()

        app.dependency_overrides[get_identity_resolver] = lambda: identity_resolver
        app.dependency_overrides[get_post_service] = lambda: PostService(test_uow_factory)
        app.dependency_overrides[get_profile_service] = lambda: ProfileService(test_uow_factory)
        if user is not None:

            async def override_get_user() -> TokenUser:
                return user

            app.dependency_overrides[get_current_user] = override_get_user

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            yield c

        app.dependency_overrides.clear()

    return make


@pytest.fixture
async def authenticated_client(
    client_factory: Callable[[TokenUser | None], Any],
    test_user: TokenUser,
) -> AsyncGenerator[AsyncClient, None]:
    """Client acting as the main test user."""
    async with client_factory(test_user) as c:
        yield c


@pytest.fixture
async def other_client(
    client_factory: Callable[[TokenUser | None], Any],
    other_user: TokenUser,
) -> AsyncGenerator[AsyncClient, None]:
    """Client acting as the second test user."""
    async with client_factory(other_user) as c:
        yield c


@pytest.fixture
async def anonymous_client(
    client_factory: Callable[[TokenUser | None], Any],
) -> AsyncGenerator[AsyncClient, None]:
    """Client with real token verification against the test database."""
    async with client_factory(None) as c:
        yield c
