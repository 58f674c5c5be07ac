"""프로비저닝 서비스 — 관리자의 계정/매장 생성 비즈니스 로직.

Provisioning Service — Admin creation of accounts and stores.
A store is always created together with its owner account; the two inserts
share one SAVEPOINT so a failure of either leaves neither row behind.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.store import Store
from app.models.user import User, UserRole
from app.repositories.store_repository import store_repository
from app.repositories.user_repository import user_repository
from app.services.auth_service import auth_service
from app.utils.exceptions import DuplicateEmailError, ValidationError
from app.utils.password import hash_password_async
from app.utils.validation import NAME_MAX_LENGTH, ensure_valid_store

logger = logging.getLogger(__name__)

# 관리자가 직접 생성할 수 있는 역할: Roles an admin may assign directly
ASSIGNABLE_ROLES: frozenset[str] = frozenset({UserRole.ADMIN.value, UserRole.USER.value})

OWNER_NAME_SUFFIX: str = " Owner"


def owner_name_for(store_name: str) -> str:
    """매장 이름으로 점주 계정 이름을 만듭니다 (최대 60자).

    Derive the owner account name "<store name> Owner", cut to the name limit.
    """
    return f"{store_name}{OWNER_NAME_SUFFIX}"[:NAME_MAX_LENGTH]


class ProvisioningService:
    """관리자 계정/매장 생성을 처리하는 서비스.

    Service handling admin-driven account and store creation.
    """

    async def create_user(
        self,
        db: AsyncSession,
        name: str | None,
        email: str | None,
        address: str | None,
        raw_password: str | None,
        role: str | None,
    ) -> User:
        """관리자 또는 일반 사용자 계정을 생성합니다.

        Create an admin or user account. Store owners can only be created
        through create_store_with_owner.

        Raises:
            ValidationError: 허용되지 않은 역할 또는 입력 규칙 위반
                             (Role not admin/user, or a field rule violated)
            DuplicateEmailError: 이미 등록된 이메일 (Email already registered)
        """
        if role not in ASSIGNABLE_ROLES:
            raise ValidationError("Invalid role. Must be admin or user.")

        return await auth_service.create_account(
            db,
            name=name,
            email=email,
            address=address,
            raw_password=raw_password,
            role=UserRole(role),
        )

    async def create_store_with_owner(
        self,
        db: AsyncSession,
        name: str | None,
        email: str | None,
        address: str | None,
    ) -> tuple[Store, User]:
        """매장과 점주 계정을 하나의 트랜잭션으로 생성합니다.

        Create the owner account and its store atomically. The owner gets the
        store's email and address, the name "<store name> Owner" and the
        configured default password.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            name: 매장 이름 (Store name, 20-60 chars)
            email: 매장/점주 이메일 (Store and owner email)
            address: 매장 주소 (Store address)

        Returns:
            tuple[Store, User]: 생성된 매장과 점주 (Created store and owner)

        Raises:
            ValidationError: 입력 규칙 위반 (Field rule violated)
            DuplicateEmailError: 사용자 또는 매장에 이미 등록된 이메일
                                 (Email already used by a user or a store)
        """
        ensure_valid_store(name, email, address)

        if await user_repository.exists(db, {"email": email}) or await store_repository.exists(
            db, {"email": email}
        ):
            raise DuplicateEmailError("Email already exists for a user/owner.")

        password_hash: str = await hash_password_async(settings.STORE_OWNER_DEFAULT_PASSWORD)
        try:
            # 점주와 매장 INSERT를 하나의 SAVEPOINT로 묶음 (Both inserts or neither)
            async with db.begin_nested():
                owner: User = await user_repository.create(
                    db,
                    {
                        "name": owner_name_for(name),
                        "email": email,
                        "address": address,
                        "password_hash": password_hash,
                        "role": UserRole.STORE_OWNER.value,
                    },
                )
                store: Store = await store_repository.create(
                    db,
                    {
                        "name": name,
                        "email": email,
                        "address": address,
                        "owner_id": owner.id,
                    },
                )
        except IntegrityError:
            raise DuplicateEmailError("Email already exists for a user/owner.") from None

        logger.info("Store provisioned: store_id=%s owner_id=%s", store.id, owner.id)
        return store, owner


# 싱글턴 인스턴스: Singleton instance
provisioning_service: ProvisioningService = ProvisioningService()
