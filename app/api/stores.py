"""매장 라우터 — 매장 평점 요약.

Store Router — Rating summary of a single store for any authenticated caller.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import CurrentIdentity, get_current_identity
from app.database import get_db
from app.schemas.rating import RatingSummary
from app.services.aggregation_service import aggregation_service

router: APIRouter = APIRouter()


@router.get("/{store_id}/rating-summary", response_model=RatingSummary)
async def get_rating_summary(
    store_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    identity: Annotated[CurrentIdentity, Depends(get_current_identity)],
) -> RatingSummary:
    """매장 전체 평균과 내 별점을 조회합니다.

    Overall average and count of a store plus the caller's own rating.
    """
    return await aggregation_service.get_summary(db, store_id, identity.user_id)
