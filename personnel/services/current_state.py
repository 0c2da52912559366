"""Current-State Resolver — loads relation rows and applies the pure "as of today" rules.

Invariants:
    - Every method takes `today` from the caller
    - current_for / current_for_secondary return every current row (possibly none)
    - current_record returns the latest current salary/title or raises NoCurrentRecordError
    - current_manager_of expects exactly one current manager per department
    - is_currently_managing never raises

Design Decisions:
    - Decision logic lives in core/current_state.py; this class only does IO
"""

import logging
from datetime import date
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from personnel.core import current_state
from personnel.core.domain_types import DeptNo, EmpNo, RelationKind
from personnel.core.errors import ErrorContext
from personnel.services.relation_specs import RELATION_SPECS
from personnel.services.temporal_store import TemporalRelationStore

logger = logging.getLogger(__name__)


class CurrentStateResolver:
    """Answers "which facts hold on `today`" for each relation kind."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _store(self, kind: RelationKind) -> TemporalRelationStore:
        return TemporalRelationStore(self.db, RELATION_SPECS[kind])

    async def current_for(
        self, kind: RelationKind, emp_no: EmpNo, today: date,
    ) -> list[Any]:
        rows = await self._store(kind).list_by_subject(emp_no)
        return current_state.current_rows(rows, today)

    async def current_for_secondary(
        self, kind: RelationKind, dept_no: DeptNo, today: date,
    ) -> list[Any]:
        rows = await self._store(kind).list_by_secondary_key(dept_no)
        return current_state.current_rows(rows, today)

    async def current_record(
        self, kind: RelationKind, emp_no: EmpNo, today: date,
    ) -> Any:
        """Latest current salary or title of an employee."""
        spec = RELATION_SPECS[kind]
        rows = await self._store(kind).list_by_subject(emp_no)
        return current_state.latest_current(
            rows, today, spec.label.lower(), f"employee {emp_no}",
            ErrorContext(emp_no=emp_no, relation=kind.value),
        )

    async def current_manager_of(self, dept_no: DeptNo, today: date) -> Any:
        kind = RelationKind.DEPARTMENT_MANAGEMENT
        rows = await self._store(kind).list_by_secondary_key(dept_no)
        manager = current_state.sole_current(
            rows, today, "manager", f"department {dept_no}",
            ErrorContext(dept_no=dept_no, relation=kind.value),
        )
        return manager

    async def is_currently_managing(self, emp_no: EmpNo, today: date) -> bool:
        rows = await self._store(RelationKind.DEPARTMENT_MANAGEMENT).list_by_subject(
            emp_no,
        )
        return current_state.any_current(rows, today)
