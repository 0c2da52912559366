"""Error Hierarchy — status codes, codes, and the REST envelope.

Tests:
    - Each error class maps to its HTTP status
    - to_response carries code, category, severity and context
    - Default context is created when none is passed
"""

import pytest

from personnel.core.errors import (
    AlreadyExistsError, AmbiguousCurrentStateError, DatabaseError, ErrorCategory,
    ErrorContext, NoCurrentRecordError, PersonnelError, ResourceNotFoundError,
    ValidationFailedError,
)


@pytest.mark.parametrize("error, status, code", [
    (ResourceNotFoundError("Employee", "1"), 404, "RESOURCE_NOT_FOUND"),
    (AlreadyExistsError("Salary", "1/2020-01-01"), 409, "ALREADY_EXISTS"),
    (NoCurrentRecordError("title", "employee 1"), 404, "NO_CURRENT_RECORD"),
    (AmbiguousCurrentStateError("manager", "department d001", 2), 409, "AMBIGUOUS_CURRENT_STATE"),
    (ValidationFailedError("bad", "from_date"), 400, "VALIDATION_ERROR"),
    (DatabaseError("timeout", "query"), 503, "DATABASE_ERROR"),
])
def test_status_and_code(error, status, code):
    assert isinstance(error, PersonnelError)
    assert error.http_status == status
    assert error.code == code


def test_to_response_envelope():
    error = ResourceNotFoundError(
        "Department", "ZZZZ", ErrorContext(dept_no="ZZZZ", relation="dept_emp"),
    )
    body = error.to_response()["error"]
    assert body["code"] == "RESOURCE_NOT_FOUND"
    assert body["category"] == ErrorCategory.RESOURCE_NOT_FOUND.value
    assert body["message"] == "Department 'ZZZZ' not found"
    assert body["context"] == {"emp_no": None, "dept_no": "ZZZZ", "relation": "dept_emp"}
    assert "timestamp" in body


def test_default_context_created():
    error = AlreadyExistsError("Employee", "10001")
    assert error.context.emp_no is None
    assert error.context.timestamp is not None
