"""Temporal Relation Store — keyed collection of effective-dated rows, generic over RelationSpec.

Invariants:
    - insert rejects a composite-key collision with AlreadyExistsError, including one
      that only surfaces as a constraint violation at flush (concurrent inserter)
    - find/update/delete of a missing composite key raise ResourceNotFoundError
    - Listings are ordered by from_date descending; no match is an empty list
    - No foreign-key existence checks here (ConsistencyGatekeeper does those)
    - Methods flush but never commit

Design Decisions:
    - Single store class parameterized by RelationSpec instead of one per kind
    - Bulk deletes for cascades: delete_by_subject / delete_by_secondary_key
"""

import logging
from datetime import date
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from personnel.core.domain_types import TemporalKey
from personnel.core.errors import (
    AlreadyExistsError, ErrorContext, ResourceNotFoundError,
)
from personnel.services.relation_specs import RelationSpec
from personnel.services.transaction import conflict_guard

logger = logging.getLogger(__name__)


class TemporalRelationStore:
    """Effective-dated rows of one relation kind."""

    def __init__(self, db: AsyncSession, spec: RelationSpec):
        self.db = db
        self.spec = spec
        self.model = spec.model

    def context_for(self, key: TemporalKey) -> ErrorContext:
        return ErrorContext(
            emp_no=key.subject_id,
            dept_no=key.secondary_key,
            relation=self.spec.kind.value,
        )

    # ─── Reads ───────────────────────────────────────────────────

    async def find_or_none(self, key: TemporalKey) -> Any | None:
        result = await self.db.execute(
            select(self.model).where(*self.spec.key_clauses(key)),
        )
        return result.scalar_one_or_none()

    async def find(self, key: TemporalKey) -> Any:
        """Row by composite identity or ResourceNotFoundError."""
        row = await self.find_or_none(key)
        if row is None:
            raise ResourceNotFoundError(
                self.spec.label, key.describe(), self.context_for(key),
            )
        return row

    async def exists(self, key: TemporalKey) -> bool:
        return await self.find_or_none(key) is not None

    async def find_pair(self, emp_no: int, secondary_key: str) -> Any | None:
        """The row for an (employee, department) pair, if any."""
        self._require_secondary()
        result = await self.db.execute(
            select(self.model)
            .where(self.model.emp_no == emp_no)
            .where(self._secondary_column() == secondary_key)
        )
        return result.scalars().first()

    async def list_all(self) -> list:
        result = await self.db.execute(
            select(self.model).order_by(
                self.model.emp_no, self.model.from_date.desc(),
            )
        )
        return list(result.scalars().all())

    async def list_by_subject(self, emp_no: int) -> list:
        query = (
            select(self.model)
            .where(self.model.emp_no == emp_no)
            .order_by(self.model.from_date.desc())
        )
        if self.spec.secondary:
            query = query.order_by(self._secondary_column())
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_by_secondary_key(self, secondary_key: str) -> list:
        self._require_secondary()
        result = await self.db.execute(
            select(self.model)
            .where(self._secondary_column() == secondary_key)
            .order_by(self.model.from_date.desc(), self.model.emp_no)
        )
        return list(result.scalars().all())

    async def search_payload(self, fragment: str) -> list:
        """Case-insensitive substring match on the payload column."""
        if not self.spec.payload:
            raise ValueError(f"{self.spec.label} has no searchable payload")
        column = getattr(self.model, self.spec.payload)
        result = await self.db.execute(
            select(self.model)
            .where(func.lower(column).contains(fragment.lower()))
            .order_by(self.model.emp_no, self.model.from_date.desc())
        )
        return list(result.scalars().all())

    # ─── Writes ──────────────────────────────────────────────────

    async def insert(self, row: Any) -> Any:
        key = self.spec.key_of(row)
        if await self.exists(key):
            raise AlreadyExistsError(
                self.spec.label, key.describe(), self.context_for(key),
            )
        async with conflict_guard(
            self.db, self.spec.label, key.describe(), self.context_for(key),
        ):
            self.db.add(row)
            await self.db.flush()
        return row

    async def update(
        self,
        key: TemporalKey,
        from_date: date,
        to_date: date | None,
        payload: Any = None,
    ) -> Any:
        """Apply date changes (and payload for salary/title) to an existing row."""
        row = await self.find(key)
        row.from_date = from_date
        row.to_date = to_date
        if self.spec.payload and payload is not None:
            setattr(row, self.spec.payload, payload)
        await self.db.flush()
        return row

    async def delete(self, key: TemporalKey) -> None:
        row = await self.find(key)
        await self.db.delete(row)
        await self.db.flush()

    async def delete_by_subject(self, emp_no: int) -> int:
        result = await self.db.execute(
            delete(self.model).where(self.model.emp_no == emp_no),
        )
        return result.rowcount or 0

    async def delete_by_secondary_key(self, secondary_key: str) -> int:
        self._require_secondary()
        result = await self.db.execute(
            delete(self.model).where(self._secondary_column() == secondary_key),
        )
        return result.rowcount or 0

    # ─── Helpers ─────────────────────────────────────────────────

    def _secondary_column(self):
        return getattr(self.model, self.spec.secondary)

    def _require_secondary(self) -> None:
        if not self.spec.secondary:
            raise ValueError(f"{self.spec.label} has no secondary key")
