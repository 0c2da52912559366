"""Department Schemas — 4-character code, unique name up to 40 characters."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from personnel.core.domain_types import DEPT_NO_LENGTH


class DepartmentUpdate(BaseModel):
    dept_name: str = Field(min_length=1, max_length=40)

    @field_validator("dept_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("dept_name cannot be empty or whitespace")
        return v


class DepartmentCreate(DepartmentUpdate):
    dept_no: str = Field(min_length=DEPT_NO_LENGTH, max_length=DEPT_NO_LENGTH)


class DepartmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    dept_no: str
    dept_name: str
