# employee_tracker/database.py
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from employee_tracker.config import settings

Base = declarative_base()


def build_engine(url: str, echo: bool = False, **kwargs) -> AsyncEngine:
    return create_async_engine(url, echo=echo, **kwargs)


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=bind, expire_on_commit=False, class_=AsyncSession)


# Engine creation does not connect; the pool opens lazily on first use.
engine = build_engine(settings.effective_database_url, echo=settings.SQL_ECHO, pool_pre_ping=True)

AsyncSessionLocal = build_sessionmaker(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session
