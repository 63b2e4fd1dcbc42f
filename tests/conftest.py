from __future__ import annotations

import httpx
import pytest_asyncio
from sqlalchemy.pool import StaticPool

import employee_tracker.models  # noqa: F401
from employee_tracker.database import Base, build_engine, build_sessionmaker, get_db
from employee_tracker.main import app
from employee_tracker.schemas.employee import EmployeeCreate
from employee_tracker.services.employees import create_employee


@pytest_asyncio.fixture
async def engine():
    # One shared in-memory connection so every session sees the same tables
    engine = build_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db(engine):
    async with build_sessionmaker(engine)() as session:
        yield session


@pytest_asyncio.fixture
async def employee(db):
    return await create_employee(
        db,
        EmployeeCreate(name="Ada Lovelace", username="ada", password="engine", work_type="Office"),
    )


@pytest_asyncio.fixture
async def client(engine):
    maker = build_sessionmaker(engine)

    async def override_get_db():
        async with maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
