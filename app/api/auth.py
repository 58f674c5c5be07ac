"""인증 라우터 — 로그인, 회원가입.

Auth Router — Login and self-signup endpoints.
Both issue a stateless access token; no authentication is required to call them.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.auth import LoginRequest, SignupRequest, TokenResponse
from app.services.auth_service import auth_service

router: APIRouter = APIRouter()


@router.post("/login", response_model=TokenResponse)
async def login(
    data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """로그인 — 이메일/비밀번호 검증 후 액세스 토큰 발급.

    Verify email and password and issue an access token.
    """
    return await auth_service.login(db, data)


@router.post("/signup", response_model=TokenResponse, status_code=201)
async def signup(
    data: SignupRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """회원가입 — 일반 사용자(role=user) 계정 생성 후 토큰 발급.

    Create a role=user account and issue an access token.
    """
    result: TokenResponse = await auth_service.signup(db, data)
    await db.commit()
    return result
