"""인증 서비스 — 자격 증명 저장소, 로그인, 회원가입 비즈니스 로직.

Auth Service — Credential store plus the login and signup flows.
Owns account creation (validation, bcrypt hashing, email uniqueness),
credential verification, password rotation, and token issuance.
"""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.store import Store
from app.models.user import User, UserRole
from app.repositories.store_repository import store_repository
from app.repositories.user_repository import user_repository
from app.schemas.auth import LoginRequest, SignupRequest, TokenResponse
from app.utils.exceptions import (
    DuplicateEmailError,
    ReferenceNotFoundError,
    UnauthorizedError,
    ValidationError,
)
from app.utils.jwt import create_access_token
from app.utils.password import hash_password_async, verify_password_async
from app.utils.validation import check_password, ensure_valid, ensure_valid_account

logger = logging.getLogger(__name__)


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스.

    Service handling credential storage and authentication.
    Unknown email and wrong password fail with the same message so callers
    cannot tell which emails are registered.
    """

    def __init__(self) -> None:
        # 존재하지 않는 이메일에도 bcrypt 비교를 수행하기 위한 더미 해시
        # Dummy hash compared against when the email is unknown
        self._dummy_hash: str | None = None

    def _build_jwt_payload(self, user: User) -> dict[str, str]:
        """JWT 토큰 페이로드를 생성합니다.

        Build the JWT token payload from user data.

        Args:
            user: 사용자 모델 (User model instance)

        Returns:
            dict[str, str]: JWT 페이로드 딕셔너리 (JWT payload dictionary)
        """
        return {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role,
        }

    def _to_token_response(self, user: User, store_id: UUID | None = None) -> TokenResponse:
        """사용자 모델과 새 토큰으로 응답을 생성합니다 (Build the token response)."""
        return TokenResponse(
            id=str(user.id),
            name=user.name,
            email=user.email,
            address=user.address,
            role=user.role,
            store_id=str(store_id) if store_id is not None else None,
            access_token=create_access_token(self._build_jwt_payload(user)),
        )

    async def create_account(
        self,
        db: AsyncSession,
        name: str | None,
        email: str | None,
        address: str | None,
        raw_password: str | None,
        role: UserRole,
    ) -> User:
        """새 계정을 생성합니다.

        Validate the fields, reject a registered email, and insert the user
        with a bcrypt hash of the password. A unique violation raced at insert
        time is reported the same way as the pre-check.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            name: 이름 (Display name)
            email: 이메일 (Login email)
            address: 주소 (Address)
            raw_password: 평문 비밀번호 (Plain text password)
            role: 역할 (Account role)

        Returns:
            User: 생성된 사용자 (Created user)

        Raises:
            ValidationError: 입력 규칙 위반 (Field rule violated)
            DuplicateEmailError: 이미 등록된 이메일 (Email already registered)
        """
        ensure_valid_account(name, email, address, raw_password)

        if await user_repository.exists(db, {"email": email}):
            raise DuplicateEmailError("Email already exists")

        password_hash: str = await hash_password_async(raw_password)
        try:
            async with db.begin_nested():
                user: User = await user_repository.create(
                    db,
                    {
                        "name": name,
                        "email": email,
                        "address": address,
                        "password_hash": password_hash,
                        "role": role.value,
                    },
                )
        except IntegrityError:
            raise DuplicateEmailError("Email already exists") from None

        logger.info("Account created: id=%s role=%s", user.id, user.role)
        return user

    async def verify_credentials(
        self,
        db: AsyncSession,
        email: str | None,
        raw_password: str | None,
    ) -> User:
        """이메일/비밀번호를 검증하고 사용자를 반환합니다.

        Look the user up by email and compare the bcrypt hash.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            email: 로그인 이메일 (Login email)
            raw_password: 평문 비밀번호 (Plain text password)

        Returns:
            User: 인증된 사용자 (Authenticated user)

        Raises:
            ValidationError: 이메일 또는 비밀번호 누락 (Missing email or password)
            UnauthorizedError: 잘못된 인증 정보 (Invalid credentials)
        """
        if not email or not raw_password:
            raise ValidationError("Email and password are required")

        user: User | None = await user_repository.get_by_email(db, email)
        if user is None:
            # 응답 시간으로 이메일 존재 여부가 드러나지 않도록 동일한 비교 수행
            await verify_password_async(raw_password, await self._get_dummy_hash())
            raise UnauthorizedError("Invalid credentials")

        if not await verify_password_async(raw_password, user.password_hash):
            raise UnauthorizedError("Invalid credentials")

        return user

    async def update_password(
        self,
        db: AsyncSession,
        user_id: UUID,
        new_raw_password: str | None,
    ) -> None:
        """비밀번호를 새 해시로 교체합니다.

        Validate and re-hash the new password, then replace the stored hash.
        The caller must already have authorized the identity (self or admin).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 대상 사용자 ID (Target user UUID)
            new_raw_password: 새 평문 비밀번호 (New plain text password)

        Raises:
            ValidationError: 비밀번호 규칙 위반 (Password rule violated)
            ReferenceNotFoundError: 사용자를 찾을 수 없을 때 (User not found)
        """
        ensure_valid(check_password(new_raw_password))

        password_hash: str = await hash_password_async(new_raw_password)
        updated: bool = await user_repository.update_password_hash(db, user_id, password_hash)
        if not updated:
            raise ReferenceNotFoundError("User not found")

        logger.info("Password updated: user_id=%s", user_id)

    async def login(
        self,
        db: AsyncSession,
        data: LoginRequest,
    ) -> TokenResponse:
        """로그인을 처리합니다.

        Verify credentials and issue a token. Store owners also receive the
        id of their store.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 로그인 요청 데이터 (Login request data)

        Returns:
            TokenResponse: 토큰 응답 (Token response)
        """
        user: User = await self.verify_credentials(db, data.email, data.password)

        store_id: UUID | None = None
        if user.role == UserRole.STORE_OWNER.value:
            store: Store | None = await store_repository.get_by_owner(db, user.id)
            store_id = store.id if store is not None else None

        return self._to_token_response(user, store_id)

    async def signup(
        self,
        db: AsyncSession,
        data: SignupRequest,
    ) -> TokenResponse:
        """일반 사용자 회원가입을 처리합니다.

        Create a role=user account and issue a token.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 회원가입 요청 데이터 (Signup request data)

        Returns:
            TokenResponse: 토큰 응답 (Token response)
        """
        user: User = await self.create_account(
            db,
            name=data.name,
            email=data.email,
            address=data.address,
            raw_password=data.password,
            role=UserRole.USER,
        )
        return self._to_token_response(user)

    async def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = await hash_password_async("Dummy@Password1")
        return self._dummy_hash


# 싱글턴 인스턴스: Singleton instance
auth_service: AuthService = AuthService()
