"""Pytest fixtures for the loyalty card API tests."""

import os

os.environ.setdefault("APP_ENV", "development")
os.environ.setdefault("DB_TYPE", "sqlite")
os.environ.setdefault("SQLITE_PATH", ":memory:")
os.environ.setdefault("JWT_ACCESS_SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENABLE_SCHEDULER", "false")

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from loyalty.core.db import Base, get_db, enable_sqlite_foreign_keys
from loyalty.core.security import hash_password, create_access_token
from loyalty.models.users.user_models import User


@pytest.fixture
async def engine(tmp_path):
    """File-backed SQLite so concurrent sessions get their own connections."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'loyalty_test.db'}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    from main import app

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def _create_user(session_factory, username: str, role: str) -> User:
    async with session_factory() as session:
        user = User(
            username=username,
            password_hash=hash_password("secret123"),
            role=role,
            is_active=True,
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user


@pytest.fixture
async def admin_user(session_factory):
    return await _create_user(session_factory, "admin@example.com", "admin")


@pytest.fixture
async def staff_user(session_factory):
    return await _create_user(session_factory, "staff@example.com", "staff")


def _auth_headers(user: User) -> dict:
    token = create_access_token(subject=user.username, token_version=user.token_version)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin_user):
    return _auth_headers(admin_user)


@pytest.fixture
def staff_headers(staff_user):
    return _auth_headers(staff_user)
