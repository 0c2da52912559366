"""Department Assignment Routes — /api/v1/dept-emp."""

from personnel.api.routes.relation_router import build_department_relation_router
from personnel.core.domain_types import RelationKind
from personnel.schemas.temporal import DeptEmpPayload, DeptEmpResponse

router = build_department_relation_router(
    RelationKind.DEPARTMENT_ASSIGNMENT,
    prefix="/api/v1/dept-emp",
    tags=["dept-emp"],
    payload_model=DeptEmpPayload,
    response_model=DeptEmpResponse,
)
