"""Temporal Relation Schemas — request and response bodies for the four effective-dated relations.

Invariants:
    - emp_no positive, dept_no exactly 4 characters, salary positive, title <= 50 chars
    - to_date, when present, is not before from_date
    - Request bodies carry the full row (key fields included); the gatekeeper
      decides which key fields an update may change

Design Decisions:
    - *Fields base classes hold the shape; *Payload adds request-only validation so
      responses never fail on legacy rows
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator

from personnel.core.domain_types import DEPT_NO_LENGTH


class _EffectiveDated(BaseModel):
    emp_no: int = Field(gt=0)
    from_date: date
    to_date: date | None = None


class _IntervalChecked(BaseModel):
    @model_validator(mode="after")
    def to_date_not_before_from_date(self):
        if self.to_date is not None and self.to_date < self.from_date:
            raise ValueError("to_date cannot precede from_date")
        return self


# --- Department assignment / management --------------------------------------

class DeptRelationFields(_EffectiveDated):
    dept_no: str = Field(min_length=DEPT_NO_LENGTH, max_length=DEPT_NO_LENGTH)


class DeptEmpPayload(DeptRelationFields, _IntervalChecked):
    """Department assignment request body."""


class DeptEmpResponse(DeptRelationFields):
    model_config = ConfigDict(from_attributes=True)


class DeptManagerPayload(DeptRelationFields, _IntervalChecked):
    """Department management request body."""


class DeptManagerResponse(DeptRelationFields):
    model_config = ConfigDict(from_attributes=True)


class ManagerStatusResponse(BaseModel):
    emp_no: int
    is_manager: bool
    as_of: date


# --- Salary -------------------------------------------------------------------

class SalaryFields(_EffectiveDated):
    salary: int = Field(gt=0)


class SalaryPayload(SalaryFields, _IntervalChecked):
    """Salary request body."""


class SalaryResponse(SalaryFields):
    model_config = ConfigDict(from_attributes=True)


# --- Title --------------------------------------------------------------------

class TitleFields(_EffectiveDated):
    title: str = Field(min_length=1, max_length=50)


class TitlePayload(TitleFields, _IntervalChecked):
    """Title request body."""


class TitleResponse(TitleFields):
    model_config = ConfigDict(from_attributes=True)
