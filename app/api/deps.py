"""FastAPI 의존성 주입 모듈 — 인증 및 권한 검사.

FastAPI dependency injection module — Authentication and authorization gate.
Derives the caller's identity from the bearer token alone (no session store,
no DB round-trip) and enforces per-route role sets plus self-scope checks.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. HTTPBearer가 토큰을 추출, 없으면 401 (HTTPBearer extracts the token, 401 if absent)
    3. decode_token()이 서명과 만료를 검증 (decode_token verifies signature and expiry)
    4. 페이로드의 sub/email/role로 CurrentIdentity 구성
       (CurrentIdentity built from the sub/email/role claims)

Authorization Flow (require_roles):
    1. get_current_identity로 인증 (Identity authenticated via get_current_identity)
    2. 역할이 허용 집합에 없으면 403 Forbidden
       (Returns 403 if the role is not in the allowed set)

Self-scope (ensure_self / ensure_self_or_admin):
    대상 사용자 ID가 토큰의 사용자 ID와 다르면 역할과 무관하게 403
    (403 when the target user id differs from the token's, regardless of role)
"""

from typing import Annotated, Callable, Awaitable
from uuid import UUID

import jwt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel

from app.models.user import UserRole
from app.utils.exceptions import ForbiddenError, UnauthorizedError
from app.utils.jwt import decode_token

# HTTP Bearer 토큰 추출기: 헤더 누락 시 직접 401을 반환하기 위해 auto_error=False
# (Extracts the token; auto_error=False so a missing header maps to our 401)
security: HTTPBearer = HTTPBearer(auto_error=False)


class CurrentIdentity(BaseModel):
    """토큰에서 복원된 인증 주체.

    Authenticated principal decoded from the access token.

    Attributes:
        user_id: 사용자 ID (User UUID, from "sub")
        email: 이메일 (Login email)
        role: 역할 (Account role)
    """

    user_id: UUID
    email: str | None = None
    role: UserRole


async def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> CurrentIdentity:
    """JWT 토큰에서 현재 인증된 사용자 정보를 추출합니다.

    Decode the bearer token and return the caller's identity.

    Args:
        credentials: HTTP Bearer 토큰 자격 증명 (Bearer token credentials from header)

    Returns:
        CurrentIdentity: 인증된 사용자 정보 (Authenticated identity)

    Raises:
        UnauthorizedError(401): 토큰 누락, 위조, 만료 (Missing, invalid, or expired token)
    """
    if credentials is None:
        raise UnauthorizedError("Access token required")

    try:
        payload: dict = decode_token(credentials.credentials)
        return CurrentIdentity(
            user_id=UUID(str(payload["sub"])),
            email=payload.get("email"),
            role=UserRole(payload["role"]),
        )
    except (jwt.InvalidTokenError, KeyError, ValueError, TypeError):
        raise UnauthorizedError("Invalid or expired token")


def require_roles(*allowed_roles: UserRole) -> Callable[..., Awaitable[CurrentIdentity]]:
    """역할 집합 기반 권한 검사 의존성 팩토리.

    Dependency factory enforcing that the caller's role belongs to the
    given set. Roles are a closed enum, so each route declares exactly which
    roles may call it.

    Args:
        allowed_roles: 허용되는 역할 목록 (Roles allowed to call the route)

    Returns:
        FastAPI 의존성 함수 — 인증된 사용자 반환 또는 403 발생
        (FastAPI dependency returning the identity or raising 403)
    """
    allowed: frozenset[UserRole] = frozenset(allowed_roles)

    async def _check(
        identity: Annotated[CurrentIdentity, Depends(get_current_identity)],
    ) -> CurrentIdentity:
        if identity.role not in allowed:
            raise ForbiddenError("Insufficient permissions")
        return identity
    return _check


# 편의 의존성: Pre-configured role dependencies
require_admin = require_roles(UserRole.ADMIN)                # 관리자만 (Admin only)
require_store_owner = require_roles(UserRole.STORE_OWNER)    # 점주만 (Store owner only)


def ensure_self(
    identity: CurrentIdentity,
    target_user_id: UUID | None,
    detail: str = "You can only act as yourself",
) -> None:
    """대상 사용자가 호출자 본인인지 확인합니다. 아니면 403.

    Self-scope check: the target id in the request must be the caller's.

    Raises:
        ForbiddenError(403): 본인이 아님 (Target is not the caller)
    """
    if target_user_id is None or target_user_id != identity.user_id:
        raise ForbiddenError(detail)


def ensure_self_or_admin(
    identity: CurrentIdentity,
    target_user_id: UUID,
    detail: str = "You can only update your own account",
) -> None:
    """본인 또는 관리자인지 확인합니다. 아니면 403.

    Self-scope check relaxed for administrators.

    Raises:
        ForbiddenError(403): 본인도 관리자도 아님 (Neither self nor admin)
    """
    if identity.role == UserRole.ADMIN:
        return
    ensure_self(identity, target_user_id, detail)
