"""평점 라우터 — 평점 제출 (삽입 또는 덮어쓰기).

Rating Router — Rating submission. The body's user_id must be the caller.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import CurrentIdentity, ensure_self, get_current_identity
from app.database import get_db
from app.schemas.rating import RatingSubmit, RatingSubmitResponse
from app.services.rating_service import rating_service

router: APIRouter = APIRouter()


@router.post("", response_model=RatingSubmitResponse, status_code=201)
async def submit_rating(
    data: RatingSubmit,
    db: Annotated[AsyncSession, Depends(get_db)],
    identity: Annotated[CurrentIdentity, Depends(get_current_identity)],
) -> RatingSubmitResponse:
    """평점을 제출합니다. 같은 매장에 다시 제출하면 값이 덮어써집니다.

    Submit a rating; resubmitting for the same store overwrites the value.
    """
    ensure_self(identity, data.user_id, "You can only submit ratings as yourself")
    rating_id: UUID = await rating_service.submit_rating(
        db, identity.user_id, data.store_id, data.rating
    )
    await db.commit()
    return RatingSubmitResponse(
        message="Rating submitted/updated successfully", rating_id=str(rating_id)
    )
