"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - EmpNo wraps int, DeptNo wraps a 4-character str
    - TemporalKey is the composite identity of every relation row:
      (subject id, secondary key or None, from_date)
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - TemporalKey as NamedTuple: hashable, comparable, usable directly as a mapping key
      (one value type for all four relation kinds)
    - str Enums: serialize to JSON without custom encoders
"""

from datetime import date
from enum import Enum
from typing import NamedTuple, NewType


# ─── Identity Types ──────────────────────────────────────────────

EmpNo = NewType("EmpNo", int)
DeptNo = NewType("DeptNo", str)

DEPT_NO_LENGTH = 4


class TemporalKey(NamedTuple):
    """Composite identity of an effective-dated row."""
    subject_id: int
    secondary_key: str | None
    from_date: date

    def describe(self) -> str:
        parts = [str(self.subject_id)]
        if self.secondary_key is not None:
            parts.append(self.secondary_key)
        parts.append(self.from_date.isoformat())
        return "/".join(parts)


# ─── Enums ───────────────────────────────────────────────────────

class Gender(str, Enum):
    """Employee gender — maps to the one-character DB `gender` column."""
    MALE = "M"
    FEMALE = "F"


class RelationKind(str, Enum):
    """The four effective-dated relations about an employee."""
    DEPARTMENT_ASSIGNMENT = "dept_emp"
    DEPARTMENT_MANAGEMENT = "dept_manager"
    SALARY = "salary"
    TITLE = "title"
