"""Employee Routes — CRUD and name search over the identity store.

Invariants:
    - emp_no is supplied by the caller on create (no autoincrement)
    - DELETE cascades to every relation row of the employee (204, no body)
    - /search is declared before /{emp_no} so it is not parsed as an id
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status

from personnel.api.dependencies import get_employee_store, page_limit
from personnel.core.domain_types import EmpNo
from personnel.schemas.employee import (
    EmployeeCreate, EmployeeResponse, EmployeeUpdate,
)
from personnel.services.identity_store import EmployeeStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/employees", tags=["employees"])


@router.get("", response_model=list[EmployeeResponse])
async def list_employees(
    limit: int = Depends(page_limit),
    offset: int = Query(0, ge=0),
    store: EmployeeStore = Depends(get_employee_store),
):
    employees = await store.list_page(limit, offset)
    return [EmployeeResponse.model_validate(e) for e in employees]


@router.get("/search", response_model=list[EmployeeResponse])
async def search_employees(
    name: str = Query(min_length=1),
    store: EmployeeStore = Depends(get_employee_store),
):
    """Case-insensitive substring search on first or last name."""
    employees = await store.search(name)
    return [EmployeeResponse.model_validate(e) for e in employees]


@router.get("/{emp_no}", response_model=EmployeeResponse)
async def get_employee(
    emp_no: int, store: EmployeeStore = Depends(get_employee_store),
):
    return EmployeeResponse.model_validate(await store.get(EmpNo(emp_no)))


@router.post(
    "", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED,
)
async def create_employee(
    body: EmployeeCreate, store: EmployeeStore = Depends(get_employee_store),
):
    employee = await store.create(
        EmpNo(body.emp_no), body.model_dump(exclude={"emp_no"}),
    )
    return EmployeeResponse.model_validate(employee)


@router.put("/{emp_no}", response_model=EmployeeResponse)
async def update_employee(
    emp_no: int,
    body: EmployeeUpdate,
    store: EmployeeStore = Depends(get_employee_store),
):
    employee = await store.update(EmpNo(emp_no), body.model_dump())
    return EmployeeResponse.model_validate(employee)


@router.delete("/{emp_no}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    emp_no: int, store: EmployeeStore = Depends(get_employee_store),
):
    await store.delete(EmpNo(emp_no))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
