"""디렉터리 라우터 — 사용자/매장/평점 목록.

Directory Router — Listings available to any authenticated caller.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import CurrentIdentity, get_current_identity
from app.database import get_db
from app.schemas.rating import RatingResponse
from app.schemas.store import StoreResponse
from app.schemas.user import UserListResponse
from app.services.directory_service import directory_service

router: APIRouter = APIRouter()


@router.get("/users", response_model=list[UserListResponse])
async def list_users(
    db: Annotated[AsyncSession, Depends(get_db)],
    identity: Annotated[CurrentIdentity, Depends(get_current_identity)],
) -> list[UserListResponse]:
    """사용자 목록 (점주는 소유 매장 ID 포함).

    List users; store owners carry the id of their store.
    """
    return await directory_service.list_users(db)


@router.get("/stores", response_model=list[StoreResponse])
async def list_stores(
    db: Annotated[AsyncSession, Depends(get_db)],
    identity: Annotated[CurrentIdentity, Depends(get_current_identity)],
) -> list[StoreResponse]:
    """매장 목록 (평균 별점, 평점 수 포함).

    List stores with their average rating and rating count.
    """
    return await directory_service.list_stores(db)


@router.get("/ratings", response_model=list[RatingResponse])
async def list_ratings(
    db: Annotated[AsyncSession, Depends(get_db)],
    identity: Annotated[CurrentIdentity, Depends(get_current_identity)],
) -> list[RatingResponse]:
    """평점 목록 (평가자 이메일 포함).

    List ratings with the rater's email.
    """
    return await directory_service.list_ratings(db)
