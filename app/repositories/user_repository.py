"""사용자 레포지토리 — 사용자 조회 및 자격 증명 쿼리.

User Repository — Lookup and credential queries for users.
Extends BaseRepository with email lookup, the user directory (joined with
owned store ids), and password hash replacement.
"""

from uuid import UUID

from sqlalchemy import Select, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.store import Store
from app.models.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """사용자 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the users table.
    """

    def __init__(self) -> None:
        """UserRepository를 초기화합니다.

        Initialize the UserRepository with the User model.
        """
        super().__init__(User)

    async def get_by_email(
        self,
        db: AsyncSession,
        email: str,
    ) -> User | None:
        """이메일로 사용자를 조회합니다.

        Retrieve a user by login email.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            email: 조회할 이메일 (Email to look up)

        Returns:
            User | None: 조회된 사용자 또는 None (Found user or None)
        """
        query: Select = select(User).where(User.email == email)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def list_with_store_ids(
        self,
        db: AsyncSession,
    ) -> list[tuple[User, UUID | None]]:
        """모든 사용자를 소유 매장 ID와 함께 조회합니다.

        Retrieve all users with the id of the store they own (LEFT JOIN on
        stores.owner_id), ordered by creation time.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)

        Returns:
            list[tuple[User, UUID | None]]: (사용자, 매장 ID 또는 None) 목록
                                            (User and owned store id, or None)
        """
        query: Select = (
            select(User, Store.id)
            .outerjoin(Store, Store.owner_id == User.id)
            .order_by(User.created_at, User.email)
        )
        result = await db.execute(query)
        return [(row[0], row[1]) for row in result.all()]

    async def update_password_hash(
        self,
        db: AsyncSession,
        user_id: UUID,
        password_hash: str,
    ) -> bool:
        """사용자의 비밀번호 해시를 교체합니다.

        Replace a user's password hash in a single UPDATE statement.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 대상 사용자 ID (Target user UUID)
            password_hash: 새 bcrypt 해시 (New bcrypt hash)

        Returns:
            bool: 갱신된 행이 있으면 True (True if a row was updated)
        """
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(password_hash=password_hash)
            .execution_options(synchronize_session="evaluate")
        )
        result = await db.execute(stmt)
        await db.flush()
        return (result.rowcount or 0) > 0


# 싱글턴 인스턴스: Singleton instance
user_repository: UserRepository = UserRepository()
