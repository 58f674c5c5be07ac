"""사용자 관련 Pydantic 요청/응답 스키마 정의.

User Pydantic request/response schema definitions.
Covers admin account creation, password rotation, and the user directory.
"""

from datetime import datetime
from pydantic import BaseModel


class UserCreate(BaseModel):
    """사용자 생성 요청 스키마 (관리자용).

    User creation request schema (admin-only operation).
    Role is restricted to "admin" or "user"; store owners are only created
    through store provisioning.

    Attributes:
        name: 이름 (Display name, 20-60 chars)
        email: 이메일 (Login email, unique)
        address: 주소 (Address, 1-400 chars)
        password: 비밀번호 (Plain text, will be bcrypt-hashed)
        role: 역할 (admin | user)
    """

    name: str | None = None
    email: str | None = None
    address: str | None = None
    password: str | None = None
    role: str | None = None  # admin | user 만 허용 (store_owner rejected)


class UserCreatedResponse(BaseModel):
    """사용자 생성 응답 스키마."""

    message: str
    user_id: str


class PasswordUpdate(BaseModel):
    """비밀번호 변경 요청 스키마.

    Password rotation request schema (self or admin).

    Attributes:
        new_password: 새 비밀번호 (New plain text password)
    """

    new_password: str | None = None


class UserListResponse(BaseModel):
    """사용자 목록 응답 스키마.

    User directory entry. Store owners carry the id of the store they own.

    Attributes:
        id: 사용자 UUID (User unique identifier)
        name: 이름 (Display name)
        email: 이메일 (Login email)
        address: 주소 (Address)
        role: 역할 (admin | user | store_owner)
        store_id: 소유 매장 UUID (Owned store UUID, null for non-owners)
        created_at: 생성 일시 (Account creation timestamp)
    """

    id: str  # 사용자 UUID 문자열 (User UUID as string)
    name: str
    email: str
    address: str | None
    role: str
    store_id: str | None = None  # 점주가 아니면 null (Null for non-owners)
    created_at: datetime
