"""API Dependencies — per-request stores, the gatekeeper, and the reference date.

Invariants:
    - "today" is injected (get_today), never read inside stores or the resolver
    - ?as_of=YYYY-MM-DD overrides today for current-state queries
    - Page size is clamped to Settings.max_page_size
"""

from datetime import date

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from personnel.config import get_settings
from personnel.infrastructure.database import get_db
from personnel.infrastructure.employee_writers import build_employee_writer
from personnel.services.current_state import CurrentStateResolver
from personnel.services.gatekeeper import ConsistencyGatekeeper
from personnel.services.identity_store import DepartmentStore, EmployeeStore


def get_today() -> date:
    """Reference date for current-state queries. Overridden in tests."""
    return date.today()


def resolve_as_of(
    as_of: date | None = Query(None, description="Reference date, defaults to today"),
    today: date = Depends(get_today),
) -> date:
    return as_of or today


def page_limit(limit: int | None = Query(None, ge=1)) -> int:
    settings = get_settings()
    return min(limit or settings.default_page_size, settings.max_page_size)


def get_employee_store(db: AsyncSession = Depends(get_db)) -> EmployeeStore:
    writer = build_employee_writer(get_settings().employee_writer, db)
    return EmployeeStore(db, writer)


def get_department_store(db: AsyncSession = Depends(get_db)) -> DepartmentStore:
    return DepartmentStore(db)


def get_gatekeeper(db: AsyncSession = Depends(get_db)) -> ConsistencyGatekeeper:
    return ConsistencyGatekeeper(db)


def get_resolver(db: AsyncSession = Depends(get_db)) -> CurrentStateResolver:
    return CurrentStateResolver(db)
