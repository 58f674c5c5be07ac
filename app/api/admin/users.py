"""관리자 사용자 라우터 — 관리자/일반 사용자 계정 생성.

Admin User Router — Account creation for the admin and user roles.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import CurrentIdentity, require_admin
from app.database import get_db
from app.models.user import User
from app.schemas.user import UserCreate, UserCreatedResponse
from app.services.provisioning_service import provisioning_service

router: APIRouter = APIRouter()


@router.post("", response_model=UserCreatedResponse, status_code=201)
async def create_user(
    data: UserCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    identity: Annotated[CurrentIdentity, Depends(require_admin)],
) -> UserCreatedResponse:
    """새 사용자를 생성합니다 (역할: admin 또는 user).

    Create an admin or user account.
    """
    user: User = await provisioning_service.create_user(
        db,
        name=data.name,
        email=data.email,
        address=data.address,
        raw_password=data.password,
        role=data.role,
    )
    await db.commit()
    return UserCreatedResponse(message="User created successfully", user_id=str(user.id))
