"""Concurrent Creation — the writer that loses a uniqueness race gets AlreadyExistsError.

Invariants:
    - A duplicate that slips past the existence checks (another request committed in
      between) is rejected by the primary key / pair constraint and reported as
      AlreadyExistsError (409), never as a database error
    - The loser's session is rolled back; the winner's row is unchanged

Design Decisions:
    - The race is reproduced deterministically: the winner commits in one session,
      then the existence checks are patched to report "free" for the loser
"""

from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from personnel.core.domain_types import Gender, RelationKind
from personnel.core.errors import AlreadyExistsError
from personnel.models.department import Department
from personnel.services.gatekeeper import ConsistencyGatekeeper
from personnel.services.identity_store import EmployeeStore
from personnel.services.temporal_store import TemporalRelationStore
from personnel.services.transaction import commit_or_conflict, conflict_guard

@pytest.fixture
def checks_miss_the_winner(monkeypatch):
    """Existence checks answer as if the winning row were not committed yet."""
    async def never_exists(self, key):
        return False

    async def no_pair(self, emp_no, secondary_key):
        return None

    monkeypatch.setattr(TemporalRelationStore, "exists", never_exists)
    monkeypatch.setattr(TemporalRelationStore, "find_pair", no_pair)


@pytest.fixture
def employee_check_misses_the_winner(monkeypatch):
    async def never_exists(self, emp_no):
        return False

    monkeypatch.setattr(EmployeeStore, "exists", never_exists)


def _salary(salary=60000):
    return {"emp_no": 10001, "salary": salary, "from_date": date(2020, 1, 1), "to_date": None}


def _assignment(from_date):
    return {"emp_no": 10001, "dept_no": "d001", "from_date": from_date, "to_date": None}


# ─── Gatekeeper ──────────────────────────────────────────────────

async def test_losing_salary_creator_gets_already_exists(
    test_session_factory, seed_identities, checks_miss_the_winner,
):
    async with test_session_factory() as winner:
        await ConsistencyGatekeeper(winner).create(RelationKind.SALARY, _salary(60000))

    async with test_session_factory() as loser:
        with pytest.raises(AlreadyExistsError) as exc:
            await ConsistencyGatekeeper(loser).create(RelationKind.SALARY, _salary(70000))
        assert exc.value.resource_id == "10001/2020-01-01"

    async with test_session_factory() as reader:
        rows = await ConsistencyGatekeeper(reader).store(RelationKind.SALARY).list_by_subject(10001)
        assert [r.salary for r in rows] == [60000]


async def test_losing_title_creator_gets_already_exists(
    test_session_factory, seed_identities, checks_miss_the_winner,
):
    values = {"emp_no": 10001, "title": "Engineer", "from_date": date(2020, 1, 1), "to_date": None}
    async with test_session_factory() as winner:
        await ConsistencyGatekeeper(winner).create(RelationKind.TITLE, values)

    async with test_session_factory() as loser:
        with pytest.raises(AlreadyExistsError):
            await ConsistencyGatekeeper(loser).create(
                RelationKind.TITLE, {**values, "title": "Staff"},
            )


async def test_losing_assignment_pair_creator_gets_already_exists(
    test_session_factory, seed_identities, checks_miss_the_winner,
):
    """Different from_date, same (employee, department): the pair constraint decides."""
    async with test_session_factory() as winner:
        await ConsistencyGatekeeper(winner).create(
            RelationKind.DEPARTMENT_ASSIGNMENT, _assignment(date(2020, 1, 1)),
        )

    async with test_session_factory() as loser:
        with pytest.raises(AlreadyExistsError):
            await ConsistencyGatekeeper(loser).create(
                RelationKind.DEPARTMENT_ASSIGNMENT, _assignment(date(2022, 1, 1)),
            )

    async with test_session_factory() as reader:
        store = ConsistencyGatekeeper(reader).store(RelationKind.DEPARTMENT_ASSIGNMENT)
        assert [r.from_date for r in await store.list_by_subject(10001)] == [date(2020, 1, 1)]


# ─── Identity store ──────────────────────────────────────────────

async def test_losing_employee_creator_gets_already_exists(
    test_session_factory, seed_identities, employee_check_misses_the_winner,
):
    fields = {
        "birth_date": date(1960, 1, 1), "first_name": "Kyoichi",
        "last_name": "Maliniak", "gender": Gender.MALE,
        "hire_date": date(1989, 6, 2),
    }
    async with test_session_factory() as loser:
        with pytest.raises(AlreadyExistsError) as exc:
            await EmployeeStore(loser).create(10001, fields)
        assert exc.value.resource_type == "Employee"

    async with test_session_factory() as reader:
        employee = await EmployeeStore(reader).get(10001)
        assert employee.first_name == "Georgi"


# ─── Transaction helpers ─────────────────────────────────────────

async def test_commit_or_conflict_translates_constraint_violation(
    test_session_factory, seed_identities,
):
    async with test_session_factory() as db:
        db.add(Department(dept_no="d009", dept_name="Marketing"))
        with pytest.raises(AlreadyExistsError) as exc:
            await commit_or_conflict(db, "Department name", "Marketing")
        assert exc.value.http_status == 409


async def test_conflict_guard_passes_other_errors_through(test_session_factory):
    async with test_session_factory() as db:
        with pytest.raises(ValueError):
            async with conflict_guard(db, "Salary", "10001/2020-01-01"):
                raise ValueError("not a constraint violation")


async def test_conflict_guard_translates_integrity_error(test_session_factory):
    async with test_session_factory() as db:
        with pytest.raises(AlreadyExistsError):
            async with conflict_guard(db, "Salary", "10001/2020-01-01"):
                raise IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))


# ─── HTTP ────────────────────────────────────────────────────────

async def test_lost_salary_race_returns_409(client, seed_identities, checks_miss_the_winner):
    body = {"emp_no": 10001, "salary": 60000, "from_date": "2020-01-01"}
    assert (await client.post("/api/v1/salaries", json=body)).status_code == 201

    res = await client.post("/api/v1/salaries", json={**body, "salary": 70000})
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "ALREADY_EXISTS"


async def test_lost_assignment_race_returns_409(client, seed_identities, checks_miss_the_winner):
    body = {"emp_no": 10001, "dept_no": "d001", "from_date": "2020-01-01"}
    assert (await client.post("/api/v1/dept-emp", json=body)).status_code == 201

    res = await client.post("/api/v1/dept-emp", json={**body, "from_date": "2022-01-01"})
    assert res.status_code == 409


async def test_lost_employee_race_returns_409(
    client, seed_identities, employee_check_misses_the_winner,
):
    res = await client.post("/api/v1/employees", json={
        "emp_no": 10001, "birth_date": "1960-01-01", "first_name": "Kyoichi",
        "last_name": "Maliniak", "gender": "M", "hire_date": "1989-06-02",
    })
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "ALREADY_EXISTS"
