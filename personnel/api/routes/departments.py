"""Department Routes — CRUD and name search; names are globally unique."""

import logging

from fastapi import APIRouter, Depends, Query, Response, status

from personnel.api.dependencies import get_department_store, page_limit
from personnel.core.domain_types import DeptNo
from personnel.schemas.department import (
    DepartmentCreate, DepartmentResponse, DepartmentUpdate,
)
from personnel.services.identity_store import DepartmentStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/departments", tags=["departments"])


@router.get("", response_model=list[DepartmentResponse])
async def list_departments(
    limit: int = Depends(page_limit),
    offset: int = Query(0, ge=0),
    store: DepartmentStore = Depends(get_department_store),
):
    departments = await store.list_page(limit, offset)
    return [DepartmentResponse.model_validate(d) for d in departments]


@router.get("/search", response_model=list[DepartmentResponse])
async def search_departments(
    name: str = Query(min_length=1),
    store: DepartmentStore = Depends(get_department_store),
):
    departments = await store.search(name)
    return [DepartmentResponse.model_validate(d) for d in departments]


@router.get("/{dept_no}", response_model=DepartmentResponse)
async def get_department(
    dept_no: str, store: DepartmentStore = Depends(get_department_store),
):
    return DepartmentResponse.model_validate(await store.get(DeptNo(dept_no)))


@router.post(
    "", response_model=DepartmentResponse, status_code=status.HTTP_201_CREATED,
)
async def create_department(
    body: DepartmentCreate, store: DepartmentStore = Depends(get_department_store),
):
    department = await store.create(DeptNo(body.dept_no), body.dept_name)
    return DepartmentResponse.model_validate(department)


@router.put("/{dept_no}", response_model=DepartmentResponse)
async def update_department(
    dept_no: str,
    body: DepartmentUpdate,
    store: DepartmentStore = Depends(get_department_store),
):
    department = await store.update(DeptNo(dept_no), body.dept_name)
    return DepartmentResponse.model_validate(department)


@router.delete("/{dept_no}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_department(
    dept_no: str, store: DepartmentStore = Depends(get_department_store),
):
    await store.delete(DeptNo(dept_no))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
