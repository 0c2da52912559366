"""Consistency Gatekeeper — the single entry point for relation-row mutations.

Invariants:
    - Steps run in the order given by core/enforce_mutations plans
    - Any failed check raises before the write step: no partial writes
    - Exactly one commit per mutation; a unique-constraint violation at flush or
      commit becomes AlreadyExistsError (concurrent creator won)
    - Update reports a missing row (404) before a key change in the body (400)
    - Existence checks run even though storage has constraints, so the error names
      the failed precondition (employee vs department vs duplicate)

Design Decisions:
    - Plans are data, step handlers are methods: _run walks the plan like a
      state machine and records the steps taken for observability
"""

import logging
from types import SimpleNamespace
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from personnel.core.domain_types import DeptNo, EmpNo, RelationKind, TemporalKey
from personnel.core.enforce_mutations import (
    MutationStep, plan_create, plan_delete, plan_update, validate_key_changes,
)
from personnel.core.errors import (
    AlreadyExistsError, ErrorContext, ResourceNotFoundError, ValidationFailedError,
)
from personnel.services.identity_store import DepartmentStore, EmployeeStore
from personnel.services.relation_specs import RELATION_SPECS, RelationSpec
from personnel.services.temporal_store import TemporalRelationStore
from personnel.services.transaction import commit_or_conflict

logger = logging.getLogger(__name__)


class _Mutation:
    """Working state of one mutation as it moves through its plan."""

    def __init__(self, spec: RelationSpec, key: TemporalKey, values: dict):
        self.spec = spec
        self.key = key
        self.values = values
        self.row: Any = None
        self.steps_taken: list[MutationStep] = []


class ConsistencyGatekeeper:
    """Validates referential existence and key uniqueness, then writes once."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.employees = EmployeeStore(db)
        self.departments = DepartmentStore(db)

    def store(self, kind: RelationKind) -> TemporalRelationStore:
        return TemporalRelationStore(self.db, RELATION_SPECS[kind])

    # ─── Public mutations ────────────────────────────────────────

    async def create(self, kind: RelationKind, values: dict) -> Any:
        """Insert a new relation row built from `values` (model column names)."""
        spec = RELATION_SPECS[kind]
        key = spec.key_of(SimpleNamespace(**values))
        mutation = _Mutation(spec, key, values)
        await self._run(mutation, plan_create(spec.pair_unique))
        await commit_or_conflict(
            self.db, spec.label, key.describe(), self.store(kind).context_for(key),
        )
        self._log("created", mutation)
        return mutation.row

    async def update(self, kind: RelationKind, key: TemporalKey, values: dict) -> Any:
        """Replace dates (and salary/title payload) of the row at `key`.

        Key fields in `values` must match `key`; assignment/management rows
        may move their from_date.
        """
        spec = RELATION_SPECS[kind]
        store = self.store(kind)
        mutation = _Mutation(spec, key, values)
        await self._run(mutation, plan_update())
        await commit_or_conflict(
            self.db, spec.label, spec.key_of(mutation.row).describe(),
            store.context_for(key),
        )
        self._log("updated", mutation)
        return mutation.row

    async def delete(self, kind: RelationKind, key: TemporalKey) -> None:
        spec = RELATION_SPECS[kind]
        mutation = _Mutation(spec, key, {})
        await self._run(mutation, plan_delete())
        await self.db.commit()
        self._log("deleted", mutation)

    async def locate_pair(
        self, kind: RelationKind, emp_no: EmpNo, dept_no: DeptNo,
    ) -> TemporalKey:
        """Composite key of the single row for an (employee, department) pair."""
        store = self.store(kind)
        row = await store.find_pair(emp_no, dept_no)
        if row is None:
            raise ResourceNotFoundError(
                store.spec.label, f"{emp_no}/{dept_no}",
                ErrorContext(emp_no=emp_no, dept_no=dept_no, relation=kind.value),
            )
        return store.spec.key_of(row)

    # ─── Plan execution ──────────────────────────────────────────

    async def _run(self, mutation: _Mutation, plan: tuple[MutationStep, ...]) -> None:
        for step in plan:
            handler = self._handlers[step]
            try:
                await handler(self, mutation)
            except (
                ResourceNotFoundError, AlreadyExistsError, ValidationFailedError,
            ) as e:
                logger.warning(
                    f"{mutation.spec.label} mutation stopped at {step.value}: {e.message}",
                    extra={
                        "emp_no": mutation.key.subject_id,
                        "dept_no": mutation.key.secondary_key,
                        "relation": mutation.spec.kind.value,
                        "error_code": e.code,
                    },
                )
                raise
            mutation.steps_taken.append(step)

    async def _check_employee_exists(self, mutation: _Mutation) -> None:
        await self.employees.require(mutation.key.subject_id)

    async def _check_department_exists(self, mutation: _Mutation) -> None:
        await self.departments.require(mutation.key.secondary_key)

    async def _check_key_free(self, mutation: _Mutation) -> None:
        store = self.store(mutation.spec.kind)
        if await store.exists(mutation.key):
            raise AlreadyExistsError(
                mutation.spec.label, mutation.key.describe(),
                store.context_for(mutation.key),
            )

    async def _check_pair_free(self, mutation: _Mutation) -> None:
        store = self.store(mutation.spec.kind)
        key = mutation.key
        if await store.find_pair(key.subject_id, key.secondary_key) is not None:
            raise AlreadyExistsError(
                mutation.spec.label, f"{key.subject_id}/{key.secondary_key}",
                store.context_for(key),
            )

    async def _check_key_exists(self, mutation: _Mutation) -> None:
        mutation.row = await self.store(mutation.spec.kind).find(mutation.key)

    async def _check_key_unchanged(self, mutation: _Mutation) -> None:
        spec = mutation.spec
        values = mutation.values
        validate_key_changes(
            mutation.key,
            values["emp_no"],
            values.get(spec.secondary) if spec.secondary else None,
            values["from_date"],
            self.store(spec.kind).context_for(mutation.key),
        )

    async def _insert(self, mutation: _Mutation) -> None:
        row = mutation.spec.model(**mutation.values)
        mutation.row = await self.store(mutation.spec.kind).insert(row)

    async def _apply_date_changes(self, mutation: _Mutation) -> None:
        spec = mutation.spec
        values = mutation.values
        mutation.row = await self.store(spec.kind).update(
            mutation.key,
            values["from_date"],
            values.get("to_date"),
            values.get(spec.payload) if spec.payload else None,
        )

    async def _remove(self, mutation: _Mutation) -> None:
        await self.store(mutation.spec.kind).delete(mutation.key)

    _handlers = {
        MutationStep.CHECK_EMPLOYEE_EXISTS: _check_employee_exists,
        MutationStep.CHECK_DEPARTMENT_EXISTS: _check_department_exists,
        MutationStep.CHECK_KEY_FREE: _check_key_free,
        MutationStep.CHECK_PAIR_FREE: _check_pair_free,
        MutationStep.CHECK_KEY_EXISTS: _check_key_exists,
        MutationStep.CHECK_KEY_UNCHANGED: _check_key_unchanged,
        MutationStep.INSERT: _insert,
        MutationStep.APPLY_DATE_CHANGES: _apply_date_changes,
        MutationStep.REMOVE: _remove,
    }

    def _log(self, verb: str, mutation: _Mutation) -> None:
        logger.info(
            f"{mutation.spec.label} {verb} "
            f"({', '.join(s.value for s in mutation.steps_taken)})",
            extra={
                "emp_no": mutation.key.subject_id,
                "dept_no": mutation.key.secondary_key,
                "relation": mutation.spec.kind.value,
                "from_date": mutation.key.from_date.isoformat(),
            },
        )

