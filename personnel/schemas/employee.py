"""Employee Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - emp_no positive; first_name <= 14 chars, last_name <= 16 chars, stripped, non-empty
    - birth_date strictly in the past; hire_date not before birth_date
    - gender is "M" or "F"
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from personnel.core.domain_types import Gender


class EmployeeUpdate(BaseModel):
    """Full replacement of an employee's mutable attributes."""
    birth_date: date
    first_name: str = Field(min_length=1, max_length=14)
    last_name: str = Field(min_length=1, max_length=16)
    gender: Gender
    hire_date: date

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v

    @field_validator("birth_date")
    @classmethod
    def birth_date_in_past(cls, v: date) -> date:
        if v >= date.today():
            raise ValueError("birth_date must be in the past")
        return v

    @model_validator(mode="after")
    def hired_after_birth(self):
        if self.hire_date < self.birth_date:
            raise ValueError("hire_date cannot precede birth_date")
        return self


class EmployeeCreate(EmployeeUpdate):
    emp_no: int = Field(gt=0)


class EmployeeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    emp_no: int
    birth_date: date
    first_name: str
    last_name: str
    gender: Gender
    hire_date: date
