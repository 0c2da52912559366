"""Salary Routes — /api/v1/salaries, rows addressed by (emp_no, from_date)."""

from personnel.api.routes.relation_router import build_dated_relation_router
from personnel.core.domain_types import RelationKind
from personnel.schemas.temporal import SalaryPayload, SalaryResponse

router = build_dated_relation_router(
    RelationKind.SALARY,
    prefix="/api/v1/salaries",
    tags=["salaries"],
    payload_model=SalaryPayload,
    response_model=SalaryResponse,
)
