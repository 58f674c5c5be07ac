"""점주 라우터 — 점주 대시보드.

Owner Router — Dashboard of the store owned by the caller.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import CurrentIdentity, require_store_owner
from app.database import get_db
from app.schemas.rating import OwnerDashboardResponse
from app.services.directory_service import directory_service

router: APIRouter = APIRouter()


@router.get("/dashboard", response_model=OwnerDashboardResponse)
async def get_dashboard(
    db: Annotated[AsyncSession, Depends(get_db)],
    identity: Annotated[CurrentIdentity, Depends(require_store_owner)],
) -> OwnerDashboardResponse:
    """점주 매장의 평균 별점과 평가자 목록.

    Owned store, its average rating and every rating with the rater's email.
    """
    return await directory_service.owner_dashboard(db, identity.user_id)
