"""Employee Writers — ORM and stored-procedure backends behind one write contract.

Invariants:
    - Both writers satisfy core.repository_protocols.EmployeeWriter
    - Writers flush or execute but never commit; the identity store owns the transaction
    - Writers do not check existence; the identity store checks before calling them

Design Decisions:
    - Procedure path is a persistence adapter, not a separate business operation:
      the store calls insert/update/delete the same way for either writer
    - Procedures are created by alembic revision 002 (PostgreSQL only)
"""

import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from personnel.core.domain_types import EmpNo, Gender
from personnel.models.employee import Employee

logger = logging.getLogger(__name__)


class OrmEmployeeWriter:
    """Writes employees through plain ORM unit-of-work operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, emp_no: EmpNo, fields: dict) -> None:
        self.db.add(Employee(emp_no=emp_no, **fields))
        await self.db.flush()

    async def update(self, emp_no: EmpNo, fields: dict) -> None:
        employee = await self.db.get(Employee, emp_no)
        for name, value in fields.items():
            setattr(employee, name, value)
        await self.db.flush()

    async def delete(self, emp_no: EmpNo) -> None:
        employee = await self.db.get(Employee, emp_no)
        await self.db.delete(employee)
        await self.db.flush()


class ProcedureEmployeeWriter:
    """Writes employees by calling the sp_*_employee stored procedures."""

    INSERT_SQL = text(
        "CALL sp_insert_employee("
        ":p_emp_no, :p_birth_date, :p_first_name, :p_last_name, "
        ":p_gender, :p_hire_date)"
    )
    UPDATE_SQL = text(
        "CALL sp_update_employee("
        ":p_emp_no, :p_birth_date, :p_first_name, :p_last_name, "
        ":p_gender, :p_hire_date)"
    )
    DELETE_SQL = text("CALL sp_delete_employee(:p_emp_no)")

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, emp_no: EmpNo, fields: dict) -> None:
        logger.debug("Calling sp_insert_employee", extra={"emp_no": emp_no})
        await self.db.execute(self.INSERT_SQL, _procedure_params(emp_no, fields))

    async def update(self, emp_no: EmpNo, fields: dict) -> None:
        logger.debug("Calling sp_update_employee", extra={"emp_no": emp_no})
        await self.db.execute(self.UPDATE_SQL, _procedure_params(emp_no, fields))

    async def delete(self, emp_no: EmpNo) -> None:
        logger.debug("Calling sp_delete_employee", extra={"emp_no": emp_no})
        await self.db.execute(self.DELETE_SQL, {"p_emp_no": emp_no})


def _procedure_params(emp_no: EmpNo, fields: dict) -> dict:
    gender = fields["gender"]
    return {
        "p_emp_no": emp_no,
        "p_birth_date": fields["birth_date"],
        "p_first_name": fields["first_name"],
        "p_last_name": fields["last_name"],
        "p_gender": gender.value if isinstance(gender, Gender) else gender,
        "p_hire_date": fields["hire_date"],
    }


def build_employee_writer(kind: str, db: AsyncSession):
    """Writer factory keyed by Settings.employee_writer."""
    if kind == "procedure":
        return ProcedureEmployeeWriter(db)
    return OrmEmployeeWriter(db)
