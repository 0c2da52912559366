"""Current-State Resolution — pure selection of the rows in effect on a given day.

Invariants:
    - A row is current at `today` iff to_date is None or to_date >= today
    - `today` is always an argument; nothing here reads a clock
    - latest_current never crashes on from_date ties (first max wins)
    - sole_current reports zero matches and several matches as distinct errors

Design Decisions:
    - Pure functions over an in-memory sequence: the shell loads the rows, these
      functions decide, which keeps date-boundary behaviour trivially testable
"""

from datetime import date
from typing import Iterable, Sequence, TypeVar

from personnel.core.errors import (
    AmbiguousCurrentStateError, ErrorContext, NoCurrentRecordError,
)
from personnel.core.repository_protocols import TemporalRow

RowT = TypeVar("RowT", bound=TemporalRow)


def is_current(row: TemporalRow, today: date) -> bool:
    return row.to_date is None or row.to_date >= today


def current_rows(rows: Iterable[RowT], today: date) -> list[RowT]:
    """Rows whose validity interval is still open at `today`, order preserved."""
    return [row for row in rows if is_current(row, today)]


def latest_current(
    rows: Iterable[RowT], today: date, relation: str, subject: str,
    context: ErrorContext | None = None,
) -> RowT:
    """Most recent current row by from_date.

    Raises NoCurrentRecordError when no row is current.
    """
    candidates = current_rows(rows, today)
    if not candidates:
        raise NoCurrentRecordError(relation, subject, context)
    return max(candidates, key=lambda row: row.from_date)


def sole_current(
    rows: Iterable[RowT], today: date, relation: str, subject: str,
    context: ErrorContext | None = None,
) -> RowT:
    """The single current row; none or several is an error."""
    candidates: Sequence[RowT] = current_rows(rows, today)
    if not candidates:
        raise NoCurrentRecordError(relation, subject, context)
    if len(candidates) > 1:
        raise AmbiguousCurrentStateError(
            relation, subject, len(candidates), context,
        )
    return candidates[0]


def any_current(rows: Iterable[TemporalRow], today: date) -> bool:
    return any(is_current(row, today) for row in rows)
