"""Database engine, session factory and request-scoped session dependency"""

from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from dental_booking.config import settings


def _connect_args() -> dict:
    if settings.database_ssl and settings.database_url.startswith("postgresql+asyncpg"):
        return {"ssl": "require"}
    return {}


engine = create_async_engine(
    settings.database_url,
    pool_pre_ping=True,
    connect_args=_connect_args(),
)

SessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

Base = declarative_base()


async def get_db() -> AsyncIterator[AsyncSession]:
    """Yield one session per request; the connection goes back to the pool on exit"""
    async with SessionLocal() as session:
        yield session
