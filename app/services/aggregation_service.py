"""집계 서비스 — 매장 평균 별점과 평점 목록 계산.

Aggregation Service — On-demand rating statistics.
Every call recomputes from the ratings table; nothing is cached between
requests and there is no stored aggregate column.

Averages are the arithmetic mean rounded half-up to one decimal place,
e.g. [5, 4] -> 4.5 and [5, 4, 3] -> 4.0. A store without ratings has an
average of 0.0.
"""

from decimal import Decimal, ROUND_HALF_UP
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.rating_repository import rating_repository
from app.repositories.store_repository import store_repository
from app.schemas.rating import RatingSummary, StoreRatingEntry
from app.utils.exceptions import ReferenceNotFoundError

# 평점이 없을 때의 평균값: Average reported for a store without ratings
NO_RATINGS_AVERAGE: float = 0.0

_ONE_DECIMAL = Decimal("0.1")


def round_average(total: int, count: int) -> float:
    """합계/개수로 소수 첫째 자리 평균을 계산합니다.

    Mean of ``count`` values summing to ``total``, rounded half-up to one
    decimal. Uses Decimal so that e.g. 4.25 rounds to 4.3 rather than
    following binary float rounding.

    Args:
        total: 별점 합계 (Sum of values)
        count: 평점 수 (Number of values)

    Returns:
        float: 반올림된 평균, 평점이 없으면 0.0 (Rounded mean, 0.0 when count is 0)
    """
    if count <= 0:
        return NO_RATINGS_AVERAGE
    mean: Decimal = Decimal(total) / Decimal(count)
    return float(mean.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


class AggregationService:
    """평점 집계를 처리하는 서비스.

    Service computing per-store rating statistics.
    """

    async def rating_stats(
        self,
        db: AsyncSession,
        store_id: UUID,
    ) -> tuple[float, int]:
        """매장의 평균 별점과 평점 수를 계산합니다.

        Return (rounded average, count) for a store.
        """
        total, count = await rating_repository.sum_and_count(db, store_id)
        return round_average(total, count), count

    async def average_rating(
        self,
        db: AsyncSession,
        store_id: UUID,
    ) -> float:
        """매장의 평균 별점을 계산합니다 (없으면 0.0).

        Return the store's average rating, 0.0 when it has none.
        """
        average, _ = await self.rating_stats(db, store_id)
        return average

    async def ratings_for_store(
        self,
        db: AsyncSession,
        store_id: UUID,
    ) -> list[StoreRatingEntry]:
        """매장의 모든 평점을 평가자 이메일과 함께 반환합니다.

        Return every (rater email, value) pair for a store.
        """
        rows = await rating_repository.list_for_store(db, store_id)
        return [StoreRatingEntry(user_email=email, rating=value) for email, value in rows]

    async def rating_for_user(
        self,
        db: AsyncSession,
        rater_id: UUID,
        store_id: UUID,
    ) -> int | None:
        """특정 사용자가 특정 매장에 준 별점 (없으면 None).

        Return the rating a user placed on a store, or None.
        """
        return await rating_repository.get_value(db, rater_id, store_id)

    async def summaries_for_stores(
        self,
        db: AsyncSession,
    ) -> dict[UUID, tuple[float, int]]:
        """전체 매장의 (평균, 개수)를 한 번에 계산합니다.

        Return {store_id: (rounded average, count)} for every rated store.
        Stores absent from the mapping have no ratings.
        """
        sums = await rating_repository.sum_and_count_by_store(db)
        return {
            store_id: (round_average(total, count), count)
            for store_id, (total, count) in sums.items()
        }

    async def get_summary(
        self,
        db: AsyncSession,
        store_id: UUID,
        rater_id: UUID,
    ) -> RatingSummary:
        """매장 전체 평점과 호출자 본인의 평점을 함께 반환합니다.

        Overall rating of a store next to the caller's own rating.

        Raises:
            ReferenceNotFoundError: 매장을 찾을 수 없을 때 (Store not found)
        """
        if not await store_repository.exists(db, {"id": store_id}):
            raise ReferenceNotFoundError("Store not found")

        average, count = await self.rating_stats(db, store_id)
        my_rating: int | None = await self.rating_for_user(db, rater_id, store_id)
        return RatingSummary(
            store_id=str(store_id),
            average_rating=average,
            rating_count=count,
            my_rating=my_rating,
        )


# 싱글턴 인스턴스: Singleton instance
aggregation_service: AggregationService = AggregationService()
