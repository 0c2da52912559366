"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB sessions
    - get_today overridden to REFERENCE_DATE so "current" is deterministic
    - db_manager patched for the readiness probe

Design Decisions:
    - SQLite in-memory with StaticPool: all sessions share one connection, so rows
      committed through the client are visible to test_db
"""

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

import personnel.infrastructure.database as db_module
import personnel.models  # noqa: F401
from personnel.api.dependencies import get_today
from personnel.core.domain_types import Gender
from personnel.db.base import Base
from personnel.infrastructure.database import DatabaseSessionManager, get_db
from personnel.main import app
from personnel.models.department import Department
from personnel.models.employee import Employee

REFERENCE_DATE = date(2023, 6, 1)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB and reference-date dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_today] = lambda: REFERENCE_DATE

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


def make_employee(emp_no: int, first_name: str = "Georgi", last_name: str = "Facello") -> Employee:
    return Employee(
        emp_no=emp_no,
        birth_date=date(1953, 9, 2),
        first_name=first_name,
        last_name=last_name,
        gender=Gender.MALE,
        hire_date=date(1986, 6, 26),
    )


@pytest.fixture
async def seed_identities(test_db):
    """Two employees (10001, 10002) and two departments (d001, d002)."""
    test_db.add_all([
        make_employee(10001),
        make_employee(10002, "Bezalel", "Simmel"),
        Department(dept_no="d001", dept_name="Marketing"),
        Department(dept_no="d002", dept_name="Finance"),
    ])
    await test_db.commit()
    return {"employees": [10001, 10002], "departments": ["d001", "d002"]}
