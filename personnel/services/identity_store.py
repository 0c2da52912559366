"""Identity Store — canonical Employee and Department records.

Invariants:
    - create rejects a taken key (and, for Department, a taken name) with AlreadyExistsError
      (also when a concurrent creator wins and the writer hits the constraint)
    - get/update/delete of a missing identity raise ResourceNotFoundError
    - update replaces every mutable attribute
    - delete removes every relation row referencing the identity, then the identity,
      in one commit
    - exists is a side-effect-free predicate

Design Decisions:
    - Employee writes go through an EmployeeWriter (ORM or stored procedures);
      reads always use ORM selects
    - Cascade runs explicitly through TemporalRelationStore so it does not depend on
      the database honouring ON DELETE CASCADE
"""

import logging

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from personnel.core.domain_types import DeptNo, EmpNo
from personnel.core.errors import (
    AlreadyExistsError, ErrorContext, ResourceNotFoundError,
)
from personnel.core.repository_protocols import EmployeeWriter
from personnel.infrastructure.employee_writers import OrmEmployeeWriter
from personnel.models.department import Department
from personnel.models.employee import Employee
from personnel.services.relation_specs import RELATION_SPECS
from personnel.services.temporal_store import TemporalRelationStore
from personnel.services.transaction import commit_or_conflict, conflict_guard

logger = logging.getLogger(__name__)

EMPLOYEE_FIELDS = ("birth_date", "first_name", "last_name", "gender", "hire_date")


class EmployeeStore:
    """Employee records keyed by emp_no."""

    def __init__(self, db: AsyncSession, writer: EmployeeWriter | None = None):
        self.db = db
        self.writer = writer or OrmEmployeeWriter(db)

    async def exists(self, emp_no: EmpNo) -> bool:
        result = await self.db.execute(
            select(Employee.emp_no).where(Employee.emp_no == emp_no),
        )
        return result.scalar_one_or_none() is not None

    async def require(self, emp_no: EmpNo) -> None:
        if not await self.exists(emp_no):
            raise ResourceNotFoundError(
                "Employee", str(emp_no), ErrorContext(emp_no=emp_no),
            )

    async def get(self, emp_no: EmpNo, refresh: bool = False) -> Employee:
        query = select(Employee).where(Employee.emp_no == emp_no)
        if refresh:
            query = query.execution_options(populate_existing=True)
        result = await self.db.execute(query)
        employee = result.scalar_one_or_none()
        if employee is None:
            raise ResourceNotFoundError(
                "Employee", str(emp_no), ErrorContext(emp_no=emp_no),
            )
        return employee

    async def list_page(self, limit: int, offset: int = 0) -> list[Employee]:
        result = await self.db.execute(
            select(Employee).order_by(Employee.emp_no).limit(limit).offset(offset),
        )
        return list(result.scalars().all())

    async def search(self, name: str) -> list[Employee]:
        """Case-insensitive substring match on first or last name."""
        fragment = name.lower()
        result = await self.db.execute(
            select(Employee)
            .where(or_(
                func.lower(Employee.first_name).contains(fragment),
                func.lower(Employee.last_name).contains(fragment),
            ))
            .order_by(Employee.emp_no)
        )
        return list(result.scalars().all())

    async def create(self, emp_no: EmpNo, fields: dict) -> Employee:
        context = ErrorContext(emp_no=emp_no)
        if await self.exists(emp_no):
            logger.warning("Employee already exists", extra={"emp_no": emp_no})
            raise AlreadyExistsError("Employee", str(emp_no), context)
        async with conflict_guard(self.db, "Employee", str(emp_no), context):
            await self.writer.insert(emp_no, _employee_fields(fields))
        await commit_or_conflict(self.db, "Employee", str(emp_no), context)
        logger.info("Employee created", extra={"emp_no": emp_no})
        return await self.get(emp_no, refresh=True)

    async def update(self, emp_no: EmpNo, fields: dict) -> Employee:
        await self.require(emp_no)
        await self.writer.update(emp_no, _employee_fields(fields))
        await self.db.commit()
        logger.info("Employee updated", extra={"emp_no": emp_no})
        return await self.get(emp_no, refresh=True)

    async def delete(self, emp_no: EmpNo) -> dict[str, int]:
        """Delete the employee and every relation row it is the subject of."""
        await self.require(emp_no)
        removed = {}
        for kind, spec in RELATION_SPECS.items():
            store = TemporalRelationStore(self.db, spec)
            removed[kind.value] = await store.delete_by_subject(emp_no)
        await self.writer.delete(emp_no)
        await self.db.commit()
        logger.info(
            f"Employee deleted, cascaded relation rows: {removed}",
            extra={"emp_no": emp_no},
        )
        return removed


class DepartmentStore:
    """Department records keyed by dept_no, with globally unique names."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def exists(self, dept_no: DeptNo) -> bool:
        result = await self.db.execute(
            select(Department.dept_no).where(Department.dept_no == dept_no),
        )
        return result.scalar_one_or_none() is not None

    async def require(self, dept_no: DeptNo) -> None:
        if not await self.exists(dept_no):
            raise ResourceNotFoundError(
                "Department", dept_no, ErrorContext(dept_no=dept_no),
            )

    async def name_taken(
        self, dept_name: str, excluding: DeptNo | None = None,
    ) -> bool:
        query = select(Department.dept_no).where(Department.dept_name == dept_name)
        if excluding is not None:
            query = query.where(Department.dept_no != excluding)
        result = await self.db.execute(query)
        return result.first() is not None

    async def get(self, dept_no: DeptNo) -> Department:
        department = await self.db.get(Department, dept_no)
        if department is None:
            raise ResourceNotFoundError(
                "Department", dept_no, ErrorContext(dept_no=dept_no),
            )
        return department

    async def list_page(self, limit: int, offset: int = 0) -> list[Department]:
        result = await self.db.execute(
            select(Department)
            .order_by(Department.dept_no)
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())

    async def search(self, name: str) -> list[Department]:
        result = await self.db.execute(
            select(Department)
            .where(func.lower(Department.dept_name).contains(name.lower()))
            .order_by(Department.dept_no)
        )
        return list(result.scalars().all())

    async def create(self, dept_no: DeptNo, dept_name: str) -> Department:
        context = ErrorContext(dept_no=dept_no)
        if await self.exists(dept_no):
            logger.warning("Department already exists", extra={"dept_no": dept_no})
            raise AlreadyExistsError("Department", dept_no, context)
        if await self.name_taken(dept_name):
            logger.warning(
                f"Department name '{dept_name}' already taken",
                extra={"dept_no": dept_no},
            )
            raise AlreadyExistsError("Department name", dept_name, context)
        department = Department(dept_no=dept_no, dept_name=dept_name)
        self.db.add(department)
        await commit_or_conflict(self.db, "Department", dept_no, context)
        logger.info("Department created", extra={"dept_no": dept_no})
        return department

    async def update(self, dept_no: DeptNo, dept_name: str) -> Department:
        department = await self.get(dept_no)
        if await self.name_taken(dept_name, excluding=dept_no):
            raise AlreadyExistsError(
                "Department name", dept_name, ErrorContext(dept_no=dept_no),
            )
        department.dept_name = dept_name
        await commit_or_conflict(
            self.db, "Department name", dept_name, ErrorContext(dept_no=dept_no),
        )
        logger.info("Department updated", extra={"dept_no": dept_no})
        return department

    async def delete(self, dept_no: DeptNo) -> dict[str, int]:
        """Delete the department and its assignment/management rows."""
        department = await self.get(dept_no)
        removed = {}
        for kind, spec in RELATION_SPECS.items():
            if not spec.pair_unique:
                continue
            store = TemporalRelationStore(self.db, spec)
            removed[kind.value] = await store.delete_by_secondary_key(dept_no)
        await self.db.delete(department)
        await self.db.commit()
        logger.info(
            f"Department deleted, cascaded relation rows: {removed}",
            extra={"dept_no": dept_no},
        )
        return removed


def _employee_fields(fields: dict) -> dict:
    return {name: fields[name] for name in EMPLOYEE_FIELDS}
