"""사용자 라우터 — 비밀번호 변경.

User Router — Password rotation for the caller's own account, or any
account when the caller is an administrator.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import CurrentIdentity, ensure_self_or_admin, get_current_identity
from app.database import get_db
from app.schemas.common import MessageResponse
from app.schemas.user import PasswordUpdate
from app.services.auth_service import auth_service

router: APIRouter = APIRouter()


@router.put("/{user_id}/password", response_model=MessageResponse)
async def update_password(
    user_id: UUID,
    data: PasswordUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    identity: Annotated[CurrentIdentity, Depends(get_current_identity)],
) -> MessageResponse:
    """비밀번호를 변경합니다 (본인 또는 관리자).

    Replace the password of the given account (self or admin).
    """
    ensure_self_or_admin(identity, user_id)
    await auth_service.update_password(db, user_id, data.new_password)
    await db.commit()
    return MessageResponse(message="Password updated successfully")
