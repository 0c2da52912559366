"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Resolver logic only needs from_date/to_date, expressed as TemporalRow
    - Employee writes go through EmployeeWriter; implementations live in the shell

Design Decisions:
    - Protocol over ABC: structural subtyping, ORM models satisfy TemporalRow as-is
    - Async in EmployeeWriter: implementations do IO, the pure resolver never is async
"""

from datetime import date
from typing import Protocol

from personnel.core.domain_types import EmpNo


class TemporalRow(Protocol):
    """Structural contract for any effective-dated row."""
    emp_no: int
    from_date: date
    to_date: date | None


class EmployeeWriter(Protocol):
    """Contract for employee persistence writes — implemented by shell.

    fields holds the mutable attributes: birth_date, first_name, last_name,
    gender, hire_date.
    """
    async def insert(self, emp_no: EmpNo, fields: dict) -> None: ...
    async def update(self, emp_no: EmpNo, fields: dict) -> None: ...
    async def delete(self, emp_no: EmpNo) -> None: ...
