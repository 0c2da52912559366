"""Title Routes — /api/v1/titles, plus case-insensitive title search."""

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from personnel.api.routes.relation_router import build_dated_relation_router
from personnel.core.domain_types import RelationKind
from personnel.infrastructure.database import get_db
from personnel.schemas.temporal import TitlePayload, TitleResponse
from personnel.services.relation_specs import RELATION_SPECS
from personnel.services.temporal_store import TemporalRelationStore

router = build_dated_relation_router(
    RelationKind.TITLE,
    prefix="/api/v1/titles",
    tags=["titles"],
    payload_model=TitlePayload,
    response_model=TitleResponse,
)


@router.get("/search", response_model=list[TitleResponse])
async def search_titles(
    title: str = Query(min_length=1),
    db: AsyncSession = Depends(get_db),
):
    store = TemporalRelationStore(db, RELATION_SPECS[RelationKind.TITLE])
    rows = await store.search_payload(title)
    return [TitleResponse.model_validate(r) for r in rows]
