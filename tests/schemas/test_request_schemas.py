"""Request Schemas — boundary validation for identities and relation rows.

Tests:
    - Names are stripped and must be non-empty
    - birth_date must be in the past, hire_date not before birth_date
    - dept_no is exactly four characters
    - to_date may not precede from_date; open-ended rows are accepted
    - salary must be positive, title at most 50 characters
"""

from datetime import date

import pytest
from pydantic import ValidationError

from personnel.schemas.department import DepartmentCreate
from personnel.schemas.employee import EmployeeCreate
from personnel.schemas.temporal import DeptEmpPayload, SalaryPayload, TitlePayload


def _employee(**overrides) -> dict:
    body = {
        "emp_no": 10001,
        "birth_date": "1953-09-02",
        "first_name": "  Georgi ",
        "last_name": "Facello",
        "gender": "M",
        "hire_date": "1986-06-26",
    }
    body.update(overrides)
    return body


def test_employee_names_stripped():
    assert EmployeeCreate(**_employee()).first_name == "Georgi"


def test_blank_name_rejected():
    with pytest.raises(ValidationError):
        EmployeeCreate(**_employee(last_name="   "))


def test_hire_before_birth_rejected():
    with pytest.raises(ValidationError):
        EmployeeCreate(**_employee(hire_date="1950-01-01"))


def test_future_birth_date_rejected():
    with pytest.raises(ValidationError):
        EmployeeCreate(**_employee(birth_date="2999-01-01", hire_date="2999-02-01"))


def test_unknown_gender_rejected():
    with pytest.raises(ValidationError):
        EmployeeCreate(**_employee(gender="X"))


def test_dept_no_length_enforced():
    with pytest.raises(ValidationError):
        DepartmentCreate(dept_no="d1", dept_name="Sales")
    assert DepartmentCreate(dept_no="d007", dept_name=" Sales ").dept_name == "Sales"


def test_open_ended_interval_accepted():
    body = DeptEmpPayload(emp_no=10001, dept_no="d001", from_date=date(2020, 1, 1))
    assert body.to_date is None


def test_inverted_interval_rejected():
    with pytest.raises(ValidationError):
        SalaryPayload(
            emp_no=10001, salary=60000,
            from_date=date(2020, 1, 1), to_date=date(2019, 12, 31),
        )


def test_same_day_interval_accepted():
    body = TitlePayload(
        emp_no=10001, title="Staff", from_date=date(2020, 1, 1), to_date=date(2020, 1, 1),
    )
    assert body.to_date == body.from_date


def test_non_positive_salary_rejected():
    with pytest.raises(ValidationError):
        SalaryPayload(emp_no=10001, salary=0, from_date=date(2020, 1, 1))


def test_long_title_rejected():
    with pytest.raises(ValidationError):
        TitlePayload(emp_no=10001, title="x" * 51, from_date=date(2020, 1, 1))
