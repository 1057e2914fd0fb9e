"""Shared test fixtures — async DB, client, factories.

Reusable across all test modules (core_hr, attendance, leave, common).
Uses SQLite + aiosqlite for fast isolated tests without PostgreSQL.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from typing import AsyncGenerator, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from hr_attendance.common.constants import EmployeeGroup, EmployeeStatus
from hr_attendance.database import Base, get_db
from hr_attendance.main import create_app

# Import ALL model modules so SQLAlchemy can resolve cross-module relationships
# (e.g. Employee → LeaveBalance, AttendanceRecord)
import hr_attendance.common.audit  # noqa: F401
import hr_attendance.core_hr.models  # noqa: F401
import hr_attendance.attendance.models  # noqa: F401
import hr_attendance.leave.models  # noqa: F401

# ── SQLite compat: compile PG-specific types to TEXT/CHAR ───────────

from sqlalchemy.dialects.postgresql import JSONB, UUID as PG_UUID
from sqlalchemy.ext.compiler import compiles


@compiles(JSONB, "sqlite")
def _jsonb_sqlite(element, compiler, **kw):
    return "TEXT"


@compiles(PG_UUID, "sqlite")
def _uuid_sqlite(element, compiler, **kw):
    return "CHAR(36)"


# ── Test database (SQLite in-memory) ────────────────────────────────

TEST_DATABASE_URL = "sqlite+aiosqlite://"

engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@event.listens_for(engine.sync_engine, "connect")
def _register_sqlite_functions(dbapi_conn, connection_record):
    """Register NOW() as a SQLite custom function."""
    dbapi_conn.create_function(
        "NOW", 0, lambda: datetime.now(timezone.utc).isoformat(),
    )


TestSessionFactory = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False,
)


@pytest.fixture(autouse=True)
async def _setup_db():
    """Create all tables before each test, drop after."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    """Reset rate limiter storage between tests to prevent cross-test interference."""
    from hr_attendance.common.rate_limit import limiter

    limiter.reset()
    yield


async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
    async with TestSessionFactory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── FastAPI test client ─────────────────────────────────────────────

@pytest.fixture
async def app():
    """Create a fresh app instance with DB dependency overridden."""
    application = create_app()
    application.dependency_overrides[get_db] = _override_get_db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client wired to the test app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# ── Database session (for direct DB operations in tests) ────────────

@pytest.fixture
async def db() -> AsyncGenerator[AsyncSession, None]:
    async with TestSessionFactory() as session:
        yield session
        await session.commit()


# ── Model factories ─────────────────────────────────────────────────

def _make_department(
    *,
    name: str = "Engineering",
    code: str = "ENG",
) -> dict:
    return dict(
        id=uuid.uuid4(),
        name=name,
        code=code,
        is_active=True,
        created_at=datetime.now(timezone.utc),
    )


def _make_employee(
    *,
    full_name: str = "Test User",
    email: Optional[str] = None,
    department_id: Optional[uuid.UUID] = None,
    employee_group: EmployeeGroup = EmployeeGroup.group_a,
    status: EmployeeStatus = EmployeeStatus.active,
    join_date: date = date(2024, 1, 15),
) -> dict:
    code = f"EMP-{uuid.uuid4().hex[:6].upper()}"
    return dict(
        id=uuid.uuid4(),
        employee_code=code,
        full_name=full_name,
        email=email or f"{code.lower()}@example.com",
        department_id=department_id,
        employee_group=employee_group,
        status=status,
        join_date=join_date,
        created_at=datetime.now(timezone.utc),
        updated_at=datetime.now(timezone.utc),
    )


@pytest.fixture
async def test_department(db) -> dict:
    """Insert a test department and return its data dict."""
    from hr_attendance.core_hr.models import Department

    data = _make_department()
    db.add(Department(**data))
    await db.commit()
    return data


@pytest.fixture
async def test_employee(db, test_department) -> dict:
    """Insert an active group A employee in test_department."""
    from hr_attendance.core_hr.models import Employee

    data = _make_employee(department_id=test_department["id"])
    db.add(Employee(**data))
    await db.commit()
    return data
