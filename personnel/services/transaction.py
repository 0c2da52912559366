"""Conflict Translation — a lost uniqueness race is reported as AlreadyExistsError.

Invariants:
    - On IntegrityError the session is rolled back before AlreadyExistsError is raised
    - Applies wherever the violation can surface: the INSERT/CALL at flush time
      (PostgreSQL blocks the second writer until the first commits, then fails the
      statement) or the commit itself
    - Other SQLAlchemy errors propagate unchanged (DatabaseSessionManager maps them)
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from personnel.core.errors import AlreadyExistsError, ErrorContext

logger = logging.getLogger(__name__)


@asynccontextmanager
async def conflict_guard(
    db: AsyncSession,
    resource_type: str,
    resource_id: str,
    context: ErrorContext | None = None,
) -> AsyncIterator[None]:
    """Turn a unique/PK violation raised inside the block into AlreadyExistsError."""
    try:
        yield
    except IntegrityError as e:
        await db.rollback()
        logger.warning(
            f"Lost uniqueness race for {resource_type} '{resource_id}': {e.orig}",
            extra={"error_code": "ALREADY_EXISTS"},
        )
        raise AlreadyExistsError(resource_type, resource_id, context) from e


async def commit_or_conflict(
    db: AsyncSession,
    resource_type: str,
    resource_id: str,
    context: ErrorContext | None = None,
) -> None:
    async with conflict_guard(db, resource_type, resource_id, context):
        await db.commit()
