"""관리자 매장 라우터 — 매장과 점주 계정 동시 생성.

Admin Store Router — Creates a store together with its owner account.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import CurrentIdentity, require_admin
from app.database import get_db
from app.schemas.store import StoreCreate, StoreCreatedResponse
from app.services.provisioning_service import provisioning_service

router: APIRouter = APIRouter()


@router.post("", response_model=StoreCreatedResponse, status_code=201)
async def create_store(
    data: StoreCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    identity: Annotated[CurrentIdentity, Depends(require_admin)],
) -> StoreCreatedResponse:
    """매장과 점주 계정을 생성합니다.

    Create a store and its owner account atomically. The owner logs in with
    the store email and the default store owner password.
    """
    store, owner = await provisioning_service.create_store_with_owner(
        db,
        name=data.name,
        email=data.email,
        address=data.address,
    )
    await db.commit()
    return StoreCreatedResponse(
        message="Store and owner created successfully",
        store_id=str(store.id),
        owner_id=str(owner.id),
    )
