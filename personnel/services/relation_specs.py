"""Relation Specs — the per-kind parameters of the generic temporal relation store.

Invariants:
    - Every relation model has emp_no, from_date, to_date columns
    - secondary is the department column for assignment/management, None otherwise
    - payload is the replaceable content column for salary/title, None otherwise
    - Kinds with a secondary key allow one row per (emp_no, dept_no) pair

Design Decisions:
    - One frozen dataclass per kind instead of four store classes: the invariant
      checking code exists once, the specs only say where the columns are
"""

from dataclasses import dataclass
from typing import Any

from personnel.core.domain_types import RelationKind, TemporalKey
from personnel.db.base import Base
from personnel.models.dept_emp import DeptEmp
from personnel.models.dept_manager import DeptManager
from personnel.models.salary import Salary
from personnel.models.title import Title


@dataclass(frozen=True)
class RelationSpec:
    kind: RelationKind
    model: type[Base]
    label: str
    secondary: str | None = None
    payload: str | None = None

    @property
    def pair_unique(self) -> bool:
        return self.secondary is not None

    def key_of(self, row: Any) -> TemporalKey:
        """Composite identity of a row (ORM instance or anything with the columns)."""
        secondary = getattr(row, self.secondary) if self.secondary else None
        return TemporalKey(row.emp_no, secondary, row.from_date)

    def key_clauses(self, key: TemporalKey) -> list:
        model = self.model
        clauses = [
            model.emp_no == key.subject_id,
            model.from_date == key.from_date,
        ]
        if self.secondary:
            clauses.append(getattr(model, self.secondary) == key.secondary_key)
        return clauses


RELATION_SPECS: dict[RelationKind, RelationSpec] = {
    RelationKind.DEPARTMENT_ASSIGNMENT: RelationSpec(
        RelationKind.DEPARTMENT_ASSIGNMENT, DeptEmp,
        "Department assignment", secondary="dept_no",
    ),
    RelationKind.DEPARTMENT_MANAGEMENT: RelationSpec(
        RelationKind.DEPARTMENT_MANAGEMENT, DeptManager,
        "Department management", secondary="dept_no",
    ),
    RelationKind.SALARY: RelationSpec(
        RelationKind.SALARY, Salary, "Salary", payload="salary",
    ),
    RelationKind.TITLE: RelationSpec(
        RelationKind.TITLE, Title, "Title", payload="title",
    ),
}
