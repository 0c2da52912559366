"""Department Management Routes — /api/v1/dept-manager.

Invariants:
    - /department/{dept_no}/current returns exactly one manager; two current
      managers surface as 409 AMBIGUOUS_CURRENT_STATE
    - /employee/{emp_no}/is-manager is true iff any management row is current
"""

from datetime import date

from fastapi import Depends

from personnel.api.dependencies import (
    get_department_store, get_employee_store, get_resolver, resolve_as_of,
)
from personnel.api.routes.relation_router import build_department_relation_router
from personnel.core.domain_types import DeptNo, EmpNo, RelationKind
from personnel.schemas.temporal import (
    DeptManagerPayload, DeptManagerResponse, ManagerStatusResponse,
)
from personnel.services.current_state import CurrentStateResolver
from personnel.services.identity_store import DepartmentStore, EmployeeStore

router = build_department_relation_router(
    RelationKind.DEPARTMENT_MANAGEMENT,
    prefix="/api/v1/dept-manager",
    tags=["dept-manager"],
    payload_model=DeptManagerPayload,
    response_model=DeptManagerResponse,
    include_department_current=False,
)


@router.get("/department/{dept_no}/current", response_model=DeptManagerResponse)
async def current_manager_of_department(
    dept_no: str,
    today: date = Depends(resolve_as_of),
    departments: DepartmentStore = Depends(get_department_store),
    resolver: CurrentStateResolver = Depends(get_resolver),
):
    await departments.require(DeptNo(dept_no))
    manager = await resolver.current_manager_of(DeptNo(dept_no), today)
    return DeptManagerResponse.model_validate(manager)


@router.get("/employee/{emp_no}/is-manager", response_model=ManagerStatusResponse)
async def is_current_manager(
    emp_no: int,
    today: date = Depends(resolve_as_of),
    employees: EmployeeStore = Depends(get_employee_store),
    resolver: CurrentStateResolver = Depends(get_resolver),
):
    await employees.require(EmpNo(emp_no))
    managing = await resolver.is_currently_managing(EmpNo(emp_no), today)
    return ManagerStatusResponse(emp_no=emp_no, is_manager=managing, as_of=today)
