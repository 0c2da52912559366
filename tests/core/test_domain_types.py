"""Domain Types — verifies identity types, the composite key, and enum values.

Tests:
    - NewType wrappers are transparent
    - TemporalKey is hashable and describes itself with or without a secondary key
    - Enums serialize to their storage strings
"""

from datetime import date

from personnel.core.domain_types import (
    DEPT_NO_LENGTH, DeptNo, EmpNo, Gender, RelationKind, TemporalKey,
)


def test_identity_types_wrap_primitives():
    assert EmpNo(10001) == 10001
    assert DeptNo("d001") == "d001"
    assert len(DeptNo("d001")) == DEPT_NO_LENGTH


def test_temporal_key_equality_and_hash():
    a = TemporalKey(10001, "d001", date(2020, 1, 1))
    b = TemporalKey(10001, "d001", date(2020, 1, 1))
    assert a == b
    assert {a: "row"}[b] == "row"


def test_temporal_key_describe_with_secondary():
    key = TemporalKey(10001, "d001", date(2020, 1, 1))
    assert key.describe() == "10001/d001/2020-01-01"


def test_temporal_key_describe_without_secondary():
    key = TemporalKey(10001, None, date(2020, 1, 1))
    assert key.describe() == "10001/2020-01-01"


def test_gender_values():
    assert Gender.MALE.value == "M"
    assert Gender("F") is Gender.FEMALE


def test_relation_kind_has_four_members():
    assert {k.value for k in RelationKind} == {"dept_emp", "dept_manager", "salary", "title"}
