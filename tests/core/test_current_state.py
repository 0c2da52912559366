"""Current-State Resolution — tests for the pure "as of today" selection rules.

Tests cover:
    - is_current: open interval, to_date == today, to_date before today
    - current_rows keeps order and drops closed rows
    - latest_current picks the max from_date among current rows
    - latest_current / sole_current raise NoCurrentRecordError on no match
    - sole_current raises AmbiguousCurrentStateError on several matches
    - any_current never raises
"""

from datetime import date
from types import SimpleNamespace

import pytest

from personnel.core.current_state import (
    any_current, current_rows, is_current, latest_current, sole_current,
)
from personnel.core.errors import AmbiguousCurrentStateError, NoCurrentRecordError

TODAY = date(2023, 6, 1)


def _row(from_date: date, to_date: date | None = None, **extra) -> SimpleNamespace:
    return SimpleNamespace(emp_no=10001, from_date=from_date, to_date=to_date, **extra)


# ─── is_current ──────────────────────────────────────────────────

def test_open_interval_is_current():
    assert is_current(_row(date(2020, 1, 1)), TODAY)


def test_to_date_equal_to_today_is_current():
    assert is_current(_row(date(2020, 1, 1), TODAY), TODAY)


def test_to_date_before_today_is_not_current():
    assert not is_current(_row(date(2020, 1, 1), date(2023, 5, 31)), TODAY)


def test_future_from_date_still_counts_as_current():
    assert is_current(_row(date(2024, 1, 1)), TODAY)


# ─── current_rows ────────────────────────────────────────────────

def test_current_rows_preserves_order():
    rows = [
        _row(date(2022, 1, 1), tag="a"),
        _row(date(2019, 1, 1), date(2020, 1, 1), tag="closed"),
        _row(date(2021, 1, 1), date(2030, 1, 1), tag="b"),
    ]
    assert [r.tag for r in current_rows(rows, TODAY)] == ["a", "b"]


def test_current_rows_empty_input():
    assert current_rows([], TODAY) == []


# ─── latest_current ──────────────────────────────────────────────

def test_latest_current_picks_most_recent_from_date():
    rows = [
        _row(date(2020, 1, 1), date(2023, 1, 1), title="Engineer"),
        _row(date(2023, 1, 2), title="Senior Engineer"),
    ]
    assert latest_current(rows, TODAY, "title", "employee 10001").title == "Senior Engineer"


def test_latest_current_ignores_closed_newer_row():
    rows = [
        _row(date(2018, 1, 1), salary=60000),
        _row(date(2022, 1, 1), date(2022, 12, 31), salary=70000),
    ]
    assert latest_current(rows, TODAY, "salary", "employee 10001").salary == 60000


def test_latest_current_tie_does_not_crash():
    rows = [_row(date(2020, 1, 1), tag="first"), _row(date(2020, 1, 1), tag="second")]
    assert latest_current(rows, TODAY, "title", "x").tag in {"first", "second"}


def test_latest_current_raises_when_nothing_current():
    rows = [_row(date(2020, 1, 1), date(2021, 1, 1))]
    with pytest.raises(NoCurrentRecordError) as exc:
        latest_current(rows, TODAY, "salary", "employee 10001")
    assert exc.value.code == "NO_CURRENT_RECORD"
    assert "employee 10001" in exc.value.message


def test_latest_current_raises_on_empty_history():
    with pytest.raises(NoCurrentRecordError):
        latest_current([], TODAY, "title", "employee 10001")


# ─── sole_current ────────────────────────────────────────────────

def test_sole_current_returns_single_match():
    rows = [_row(date(2020, 1, 1), date(2021, 1, 1)), _row(date(2021, 1, 2), tag="now")]
    assert sole_current(rows, TODAY, "manager", "department d001").tag == "now"


def test_sole_current_raises_no_current_when_empty():
    with pytest.raises(NoCurrentRecordError):
        sole_current([], TODAY, "manager", "department d001")


def test_sole_current_raises_ambiguous_on_two_matches():
    rows = [_row(date(2020, 1, 1)), _row(date(2021, 1, 1))]
    with pytest.raises(AmbiguousCurrentStateError) as exc:
        sole_current(rows, TODAY, "manager", "department d001")
    assert exc.value.count == 2
    assert exc.value.http_status == 409


# ─── any_current ─────────────────────────────────────────────────

def test_any_current_true_when_one_row_open():
    rows = [_row(date(2019, 1, 1), date(2020, 1, 1)), _row(date(2021, 1, 1))]
    assert any_current(rows, TODAY) is True


def test_any_current_false_on_empty_or_closed():
    assert any_current([], TODAY) is False
    assert any_current([_row(date(2019, 1, 1), date(2020, 1, 1))], TODAY) is False
