"""Mutation Enforcement — the check sequence of every relation mutation, and key-change rules.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - Every plan ends with exactly one write step; checks run strictly before it
    - A failed check short-circuits the plan (the gatekeeper raises on the first failure)
    - Salary/title updates may not change any key field; assignment/management
      updates may change from_date but not the (emp_no, dept_no) pair

Design Decisions:
    - Plans as tuples of MutationStep: the gatekeeper walks them like a state machine,
      so the order of checks is data that tests can assert on directly
"""

from datetime import date
from enum import Enum

from personnel.core.domain_types import TemporalKey
from personnel.core.errors import ErrorContext, ValidationFailedError


class MutationStep(str, Enum):
    CHECK_EMPLOYEE_EXISTS = "check_employee_exists"
    CHECK_DEPARTMENT_EXISTS = "check_department_exists"
    CHECK_KEY_FREE = "check_composite_key_free"
    CHECK_PAIR_FREE = "check_pair_free"
    CHECK_KEY_EXISTS = "check_composite_key_exists"
    CHECK_KEY_UNCHANGED = "check_key_fields_unchanged"
    INSERT = "insert"
    APPLY_DATE_CHANGES = "apply_date_changes"
    REMOVE = "remove"


WRITE_STEPS = frozenset({
    MutationStep.INSERT, MutationStep.APPLY_DATE_CHANGES, MutationStep.REMOVE,
})


def plan_create(has_department: bool) -> tuple[MutationStep, ...]:
    """Create: referenced identities first, then key uniqueness, then the insert."""
    if has_department:
        return (
            MutationStep.CHECK_EMPLOYEE_EXISTS,
            MutationStep.CHECK_DEPARTMENT_EXISTS,
            MutationStep.CHECK_KEY_FREE,
            MutationStep.CHECK_PAIR_FREE,
            MutationStep.INSERT,
        )
    return (
        MutationStep.CHECK_EMPLOYEE_EXISTS,
        MutationStep.CHECK_KEY_FREE,
        MutationStep.INSERT,
    )


def plan_update() -> tuple[MutationStep, ...]:
    """Update: a missing row is reported before any key-change complaint."""
    return (
        MutationStep.CHECK_KEY_EXISTS,
        MutationStep.CHECK_KEY_UNCHANGED,
        MutationStep.APPLY_DATE_CHANGES,
    )


def plan_delete() -> tuple[MutationStep, ...]:
    return (MutationStep.CHECK_KEY_EXISTS, MutationStep.REMOVE)


def check_subject_unchanged(key: TemporalKey, emp_no: int, ctx: ErrorContext) -> None:
    if emp_no != key.subject_id:
        raise ValidationFailedError(
            f"emp_no cannot change on update ({key.subject_id} -> {emp_no})",
            "emp_no", ctx,
        )


def check_secondary_unchanged(
    key: TemporalKey, dept_no: str | None, ctx: ErrorContext,
) -> None:
    if dept_no != key.secondary_key:
        raise ValidationFailedError(
            f"dept_no cannot change on update ({key.secondary_key} -> {dept_no})",
            "dept_no", ctx,
        )


def check_from_date_unchanged(
    key: TemporalKey, from_date: date, ctx: ErrorContext,
) -> None:
    if from_date != key.from_date:
        raise ValidationFailedError(
            f"from_date is part of the record key and cannot change on update "
            f"({key.from_date.isoformat()} -> {from_date.isoformat()})",
            "from_date", ctx,
        )


def validate_key_changes(
    key: TemporalKey,
    emp_no: int,
    dept_no: str | None,
    from_date: date,
    ctx: ErrorContext,
) -> None:
    """Reject key changes carried in an update body. First violation wins."""
    check_subject_unchanged(key, emp_no, ctx)
    if key.secondary_key is not None:
        check_secondary_unchanged(key, dept_no, ctx)
    else:
        check_from_date_unchanged(key, from_date, ctx)
