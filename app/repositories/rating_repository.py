"""평점 레포지토리 — 평점 원장 upsert 및 집계 쿼리.

Rating Repository — Ledger writes and aggregate reads for the ratings table.
Writes go through a single INSERT ... ON CONFLICT (user_id, store_id)
DO UPDATE statement, so the database constraint alone decides whether a
submission creates or overwrites a row.
"""

import uuid
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.rating import Rating
from app.models.user import User
from app.repositories.base import BaseRepository

# 방언별 INSERT 생성자: Dialect-specific INSERT constructs supporting ON CONFLICT
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class RatingRepository(BaseRepository[Rating]):
    """평점 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the ratings table.
    Reads return plain column rows rather than ORM entities so every call
    reflects the current table state.
    """

    def __init__(self) -> None:
        """RatingRepository를 초기화합니다.

        Initialize the RatingRepository with the Rating model.
        """
        super().__init__(Rating)

    async def upsert(
        self,
        db: AsyncSession,
        user_id: UUID,
        store_id: UUID,
        value: int,
    ) -> UUID:
        """평점을 삽입하거나 기존 평점을 덮어씁니다.

        Insert a rating for (user_id, store_id), or overwrite the value of the
        existing row on conflict with uq_rating_user_store.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 평가자 ID (Rater UUID)
            store_id: 매장 ID (Store UUID)
            value: 별점 1~5 (Star value)

        Returns:
            UUID: 생성되었거나 갱신된 평점의 ID (Id of the inserted or updated row)

        Raises:
            sqlalchemy.exc.IntegrityError: 매장/사용자 FK 위반 시 (Unknown store or user)
            NotImplementedError: ON CONFLICT를 지원하지 않는 DB일 때 (Unsupported dialect)
        """
        dialect_name: str = db.get_bind().dialect.name
        insert_fn = _UPSERT_INSERTS.get(dialect_name)
        if insert_fn is None:
            raise NotImplementedError(f"Rating upsert is not supported on {dialect_name}")

        now: datetime = datetime.now(timezone.utc)
        stmt = insert_fn(Rating).values(
            id=uuid.uuid4(),
            user_id=user_id,
            store_id=store_id,
            rating=value,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[Rating.user_id, Rating.store_id],
            set_={"rating": stmt.excluded.rating, "updated_at": now},
        ).returning(Rating.id)

        result = await db.execute(stmt)
        return result.scalar_one()

    async def get_value(
        self,
        db: AsyncSession,
        user_id: UUID,
        store_id: UUID,
    ) -> int | None:
        """특정 사용자가 특정 매장에 준 별점을 조회합니다.

        Return the value a user gave a store, or None if they have not rated it.
        """
        query: Select = select(Rating.rating).where(
            Rating.user_id == user_id,
            Rating.store_id == store_id,
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def sum_and_count(
        self,
        db: AsyncSession,
        store_id: UUID,
    ) -> tuple[int, int]:
        """매장 평점의 합계와 개수를 조회합니다.

        Return (sum of values, number of ratings) for a store. Both are 0
        when the store has no ratings.
        """
        query: Select = select(
            func.coalesce(func.sum(Rating.rating), 0),
            func.count(Rating.id),
        ).where(Rating.store_id == store_id)
        row = (await db.execute(query)).one()
        return int(row[0]), int(row[1])

    async def sum_and_count_by_store(
        self,
        db: AsyncSession,
    ) -> dict[UUID, tuple[int, int]]:
        """전체 매장의 평점 합계/개수를 한 번의 GROUP BY로 조회합니다.

        Return {store_id: (sum, count)} for every store that has ratings.
        """
        query: Select = select(
            Rating.store_id,
            func.sum(Rating.rating),
            func.count(Rating.id),
        ).group_by(Rating.store_id)
        result = await db.execute(query)
        return {row[0]: (int(row[1]), int(row[2])) for row in result.all()}

    async def list_for_store(
        self,
        db: AsyncSession,
        store_id: UUID,
    ) -> list[tuple[str, int]]:
        """매장 평점을 평가자 이메일과 함께 조회합니다.

        Return (rater email, value) pairs for a store, most recent first.
        """
        query: Select = (
            select(User.email, Rating.rating)
            .join(User, User.id == Rating.user_id)
            .where(Rating.store_id == store_id)
            .order_by(Rating.updated_at.desc(), User.email)
        )
        result = await db.execute(query)
        return [(row[0], row[1]) for row in result.all()]

    async def list_with_emails(
        self,
        db: AsyncSession,
    ) -> list[tuple[UUID, UUID, UUID, int, str]]:
        """모든 평점을 평가자 이메일과 함께 조회합니다.

        Return (id, user_id, store_id, value, rater email) for every rating.
        """
        query: Select = (
            select(Rating.id, Rating.user_id, Rating.store_id, Rating.rating, User.email)
            .join(User, User.id == Rating.user_id)
            .order_by(Rating.created_at, User.email)
        )
        result = await db.execute(query)
        return [(row[0], row[1], row[2], row[3], row[4]) for row in result.all()]


# 싱글턴 인스턴스: Singleton instance
rating_repository: RatingRepository = RatingRepository()
