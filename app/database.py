"""
Database Connection and Session Management

One async engine per process, built from DATABASE_URL. Route handlers get a
session through the get_db dependency; the lifespan hook in main.py calls
init_models() on startup and close_engine() on shutdown.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.config import settings
from app.models import Base


def build_engine(url: str) -> AsyncEngine:
    # pool_pre_ping drops connections the server closed while idle
    # (not needed for SQLite, which has no server)
    return create_async_engine(url, pool_pre_ping=not url.startswith("sqlite"))


engine = build_engine(settings.DATABASE_URL)

# expire_on_commit=False: users are serialized after commit, and attribute
# refreshes would need another await inside the response code
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)


async def init_models() -> None:
    """Create missing tables. Existing tables are left untouched."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_engine() -> None:
    await engine.dispose()


async def get_db():
    """Yield a session for one request; it is closed even if the handler raises."""
    async with AsyncSessionLocal() as session:
        yield session
