"""Relation Router Builders — the HTTP surface shared by the four effective-dated relations.

Invariants:
    - Every mutation goes through ConsistencyGatekeeper
    - By-employee / by-department endpoints 404 when the identity does not exist;
      an existing identity with no rows yields []
    - Current-state endpoints take ?as_of, else the injected today
    - Assignment/management rows are addressed by (emp_no, dept_no);
      salary/title rows by (emp_no, from_date)

Design Decisions:
    - Builder functions instead of four copy-pasted route modules: the resource
      modules call a builder and add only what is specific to them
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from personnel.api.dependencies import (
    get_department_store, get_employee_store, get_gatekeeper, get_resolver,
    resolve_as_of,
)
from personnel.core.domain_types import DeptNo, EmpNo, RelationKind, TemporalKey
from personnel.infrastructure.database import get_db
from personnel.services.current_state import CurrentStateResolver
from personnel.services.gatekeeper import ConsistencyGatekeeper
from personnel.services.identity_store import DepartmentStore, EmployeeStore
from personnel.services.relation_specs import RELATION_SPECS
from personnel.services.temporal_store import TemporalRelationStore

logger = logging.getLogger(__name__)


def _history_routes(
    router: APIRouter,
    kind: RelationKind,
    payload_model: type[BaseModel],
    response_model: type[BaseModel],
) -> None:
    """List-all, list-by-employee and create — identical for every kind."""
    spec = RELATION_SPECS[kind]

    @router.get("", response_model=list[response_model])
    async def list_all(db: AsyncSession = Depends(get_db)):
        rows = await TemporalRelationStore(db, spec).list_all()
        return [response_model.model_validate(r) for r in rows]

    @router.get("/employee/{emp_no}", response_model=list[response_model])
    async def list_by_employee(
        emp_no: int,
        db: AsyncSession = Depends(get_db),
        employees: EmployeeStore = Depends(get_employee_store),
    ):
        await employees.require(EmpNo(emp_no))
        rows = await TemporalRelationStore(db, spec).list_by_subject(emp_no)
        return [response_model.model_validate(r) for r in rows]

    @router.post(
        "", response_model=response_model, status_code=status.HTTP_201_CREATED,
    )
    async def create(
        body: payload_model,
        gatekeeper: ConsistencyGatekeeper = Depends(get_gatekeeper),
    ):
        row = await gatekeeper.create(kind, body.model_dump())
        return response_model.model_validate(row)


def build_department_relation_router(
    kind: RelationKind,
    prefix: str,
    tags: list[str],
    payload_model: type[BaseModel],
    response_model: type[BaseModel],
    include_department_current: bool = True,
) -> APIRouter:
    """Routes for relations between an employee and a department."""
    router = APIRouter(prefix=prefix, tags=tags)
    spec = RELATION_SPECS[kind]
    _history_routes(router, kind, payload_model, response_model)

    @router.get("/employee/{emp_no}/current", response_model=list[response_model])
    async def current_by_employee(
        emp_no: int,
        today: date = Depends(resolve_as_of),
        employees: EmployeeStore = Depends(get_employee_store),
        resolver: CurrentStateResolver = Depends(get_resolver),
    ):
        await employees.require(EmpNo(emp_no))
        rows = await resolver.current_for(kind, EmpNo(emp_no), today)
        return [response_model.model_validate(r) for r in rows]

    @router.get("/department/{dept_no}", response_model=list[response_model])
    async def list_by_department(
        dept_no: str,
        db: AsyncSession = Depends(get_db),
        departments: DepartmentStore = Depends(get_department_store),
    ):
        await departments.require(DeptNo(dept_no))
        rows = await TemporalRelationStore(db, spec).list_by_secondary_key(dept_no)
        return [response_model.model_validate(r) for r in rows]

    if include_department_current:
        @router.get(
            "/department/{dept_no}/current", response_model=list[response_model],
        )
        async def current_by_department(
            dept_no: str,
            today: date = Depends(resolve_as_of),
            departments: DepartmentStore = Depends(get_department_store),
            resolver: CurrentStateResolver = Depends(get_resolver),
        ):
            await departments.require(DeptNo(dept_no))
            rows = await resolver.current_for_secondary(kind, DeptNo(dept_no), today)
            return [response_model.model_validate(r) for r in rows]

    @router.put("/{emp_no}/{dept_no}", response_model=response_model)
    async def update(
        emp_no: int,
        dept_no: str,
        body: payload_model,
        gatekeeper: ConsistencyGatekeeper = Depends(get_gatekeeper),
    ):
        key = await gatekeeper.locate_pair(kind, EmpNo(emp_no), DeptNo(dept_no))
        row = await gatekeeper.update(kind, key, body.model_dump())
        return response_model.model_validate(row)

    @router.delete("/{emp_no}/{dept_no}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete(
        emp_no: int,
        dept_no: str,
        gatekeeper: ConsistencyGatekeeper = Depends(get_gatekeeper),
    ):
        key = await gatekeeper.locate_pair(kind, EmpNo(emp_no), DeptNo(dept_no))
        await gatekeeper.delete(kind, key)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


def build_dated_relation_router(
    kind: RelationKind,
    prefix: str,
    tags: list[str],
    payload_model: type[BaseModel],
    response_model: type[BaseModel],
) -> APIRouter:
    """Routes for employee-only histories keyed by (emp_no, from_date)."""
    router = APIRouter(prefix=prefix, tags=tags)
    _history_routes(router, kind, payload_model, response_model)

    @router.get("/employee/{emp_no}/current", response_model=response_model)
    async def current_by_employee(
        emp_no: int,
        today: date = Depends(resolve_as_of),
        employees: EmployeeStore = Depends(get_employee_store),
        resolver: CurrentStateResolver = Depends(get_resolver),
    ):
        await employees.require(EmpNo(emp_no))
        row = await resolver.current_record(kind, EmpNo(emp_no), today)
        return response_model.model_validate(row)

    @router.put("/{emp_no}/{from_date}", response_model=response_model)
    async def update(
        emp_no: int,
        from_date: date,
        body: payload_model,
        gatekeeper: ConsistencyGatekeeper = Depends(get_gatekeeper),
    ):
        key = TemporalKey(emp_no, None, from_date)
        row = await gatekeeper.update(kind, key, body.model_dump())
        return response_model.model_validate(row)

    @router.delete("/{emp_no}/{from_date}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete(
        emp_no: int,
        from_date: date,
        gatekeeper: ConsistencyGatekeeper = Depends(get_gatekeeper),
    ):
        await gatekeeper.delete(kind, TemporalKey(emp_no, None, from_date))
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
