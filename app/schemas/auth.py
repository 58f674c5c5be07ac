"""인증 관련 Pydantic 요청/응답 스키마 정의.

Authentication-related Pydantic request/response schema definitions.
Covers login, self-signup, and the token issuance response.

Field rules (length, format) are enforced by app.utils.validation in the
service layer so that every failure carries the same human-readable message;
request fields are therefore optional here.
"""

from pydantic import BaseModel


class LoginRequest(BaseModel):
    """로그인 요청 스키마.

    Login request schema.

    Attributes:
        email: 로그인 이메일 (Login email)
        password: 비밀번호 (Plain text password, verified against bcrypt hash)
    """

    email: str | None = None  # 로그인 이메일 (Login email)
    password: str | None = None  # 비밀번호: 평문, 서버에서 bcrypt 해시와 비교 (Plain text, compared to bcrypt hash)


class SignupRequest(BaseModel):
    """일반 사용자 회원가입 요청 스키마.

    Self-signup request schema. Always creates a role=user account.

    Attributes:
        name: 이름 (Display name, 20-60 chars)
        email: 이메일 (Login email, unique)
        address: 주소 (Address, 1-400 chars)
        password: 비밀번호 (Plain text, will be bcrypt-hashed on server)
    """

    name: str | None = None
    email: str | None = None
    address: str | None = None
    password: str | None = None


class TokenResponse(BaseModel):
    """JWT 토큰 발급 응답 스키마.

    Token issuance response returned by login and signup.
    Carries the authenticated user's public profile next to the token;
    the password hash is never included.

    Attributes:
        id: 사용자 UUID (User identifier)
        name: 이름 (Display name)
        email: 이메일 (Login email)
        address: 주소 (Address)
        role: 역할 (admin | user | store_owner)
        store_id: 소유 매장 UUID, 점주만 (Owned store, store owners only)
        access_token: JWT 액세스 토큰 (Signed access token, 24h TTL)
        token_type: 토큰 유형 (Always "bearer" for Authorization header)
    """

    id: str
    name: str
    email: str
    address: str | None
    role: str
    store_id: str | None = None  # 점주만 값이 있음 (Set for store owners only)
    access_token: str  # JWT 액세스 토큰: 만료: 24시간 (Access token, TTL: 24h)
    token_type: str = "bearer"  # 토큰 유형: 항상 "bearer" (Token type for Authorization header)
