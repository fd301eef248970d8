# loyalty/core/db.py

import ssl
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from loyalty.core.config import (
    DATABASE_URL,
    DB_TYPE,
    DB_POOL_SIZE,
    DB_MAX_OVERFLOW,
    DB_POOL_TIMEOUT,
    DB_SSL_VERIFY,
    DB_ECHO_POOL,
    APP_ENV,
)

Base = declarative_base()


# =====================================================
# ENGINE OPTIONS PER BACKEND
# =====================================================
def _postgres_options() -> dict:
    ssl_ctx = ssl.create_default_context()
    if not DB_SSL_VERIFY:
        ssl_ctx.check_hostname = False
        ssl_ctx.verify_mode = ssl.CERT_NONE

    return {
        "connect_args": {
            "ssl": ssl_ctx,
            # asyncpg behind a transaction pooler cannot keep prepared statements
            "statement_cache_size": 0,
            "prepared_statement_cache_size": 0,
        },
        "pool_size": DB_POOL_SIZE,
        "max_overflow": DB_MAX_OVERFLOW,
        "pool_timeout": DB_POOL_TIMEOUT,
        "pool_pre_ping": True,
    }


def _sqlite_options() -> dict:
    return {"connect_args": {"check_same_thread": False}}


def enable_sqlite_foreign_keys(dbapi_connection, _):
    """SQLite ignores ON DELETE CASCADE unless this is set per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# =====================================================
# ENGINE + SESSION
# =====================================================
engine = create_async_engine(
    DATABASE_URL,
    echo=False,
    echo_pool=DB_ECHO_POOL,
    **(_postgres_options() if DB_TYPE == "postgres" else _sqlite_options()),
)

if DB_TYPE == "sqlite":
    event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)

AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session


# Registers every table on Base.metadata
import loyalty.models  # noqa: E402,F401


# =====================================================
# DEV ONLY: AUTO CREATE TABLES
# =====================================================
async def init_models():
    if APP_ENV != "development":
        raise RuntimeError("init_models() is forbidden outside development")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
