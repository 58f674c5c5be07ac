"""매장 레포지토리 — 매장 조회 쿼리.

Store Repository — Queries for the stores table.
Extends BaseRepository with owner lookup and the ordered store listing.
"""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.store import Store
from app.repositories.base import BaseRepository


class StoreRepository(BaseRepository[Store]):
    """매장 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the stores table.
    """

    def __init__(self) -> None:
        """StoreRepository를 초기화합니다.

        Initialize the StoreRepository with the Store model.
        """
        super().__init__(Store)

    async def list_all(
        self,
        db: AsyncSession,
    ) -> list[Store]:
        """모든 매장을 생성 순으로 조회합니다.

        Retrieve all stores ordered by creation time.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)

        Returns:
            list[Store]: 매장 목록 (List of stores)
        """
        stores = await self.get_all(db, order_by=Store.created_at)
        return list(stores)

    async def get_by_owner(
        self,
        db: AsyncSession,
        owner_id: UUID,
    ) -> Store | None:
        """점주 ID로 매장을 조회합니다.

        Retrieve the store owned by a user (at most one).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            owner_id: 점주 사용자 ID (Owner user UUID)

        Returns:
            Store | None: 소유 매장 또는 None (Owned store or None)
        """
        query: Select = select(Store).where(Store.owner_id == owner_id)
        result = await db.execute(query)
        return result.scalar_one_or_none()


# 싱글턴 인스턴스: Singleton instance
store_repository: StoreRepository = StoreRepository()
