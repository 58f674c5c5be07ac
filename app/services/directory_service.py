"""디렉터리 서비스 — 사용자/매장/평점 목록 및 점주 대시보드 조회.

Directory Service — Read-only listings of users, stores and ratings, and the
store owner dashboard. Password hashes never leave this layer.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.store import Store
from app.models.user import User
from app.repositories.rating_repository import rating_repository
from app.repositories.store_repository import store_repository
from app.repositories.user_repository import user_repository
from app.schemas.rating import OwnerDashboardResponse, RatingResponse
from app.schemas.store import StoreResponse
from app.schemas.user import UserListResponse
from app.services.aggregation_service import (
    NO_RATINGS_AVERAGE,
    aggregation_service,
)
from app.utils.exceptions import ReferenceNotFoundError


class DirectoryService:
    """목록 조회를 처리하는 서비스.

    Service building the directory views exposed to authenticated callers.
    """

    def _to_user_response(self, user: User, store_id: UUID | None) -> UserListResponse:
        return UserListResponse(
            id=str(user.id),
            name=user.name,
            email=user.email,
            address=user.address,
            role=user.role,
            store_id=str(store_id) if store_id is not None else None,
            created_at=user.created_at,
        )

    def _to_store_response(
        self,
        store: Store,
        average: float = NO_RATINGS_AVERAGE,
        count: int = 0,
    ) -> StoreResponse:
        """매장 모델을 응답 스키마로 변환합니다.

        Convert a Store model instance plus its aggregate to a StoreResponse.
        """
        return StoreResponse(
            id=str(store.id),
            name=store.name,
            email=store.email,
            address=store.address,
            owner_id=str(store.owner_id),
            average_rating=average,
            rating_count=count,
            created_at=store.created_at,
        )

    async def list_users(self, db: AsyncSession) -> list[UserListResponse]:
        """모든 사용자를 소유 매장 ID와 함께 조회합니다 (List users with owned store ids)."""
        rows = await user_repository.list_with_store_ids(db)
        return [self._to_user_response(user, store_id) for user, store_id in rows]

    async def list_stores(self, db: AsyncSession) -> list[StoreResponse]:
        """모든 매장을 평균 별점/평점 수와 함께 조회합니다.

        List every store with its average rating and rating count. Aggregates
        come from a single grouped query rather than one query per store.
        """
        stores: list[Store] = await store_repository.list_all(db)
        summaries = await aggregation_service.summaries_for_stores(db)
        responses: list[StoreResponse] = []
        for store in stores:
            average, count = summaries.get(store.id, (NO_RATINGS_AVERAGE, 0))
            responses.append(self._to_store_response(store, average, count))
        return responses

    async def list_ratings(self, db: AsyncSession) -> list[RatingResponse]:
        """모든 평점을 평가자 이메일과 함께 조회합니다 (List ratings with rater email)."""
        rows = await rating_repository.list_with_emails(db)
        return [
            RatingResponse(
                id=str(rating_id),
                user_id=str(user_id),
                store_id=str(store_id),
                rating=value,
                user_email=email,
            )
            for rating_id, user_id, store_id, value, email in rows
        ]

    async def owner_dashboard(
        self,
        db: AsyncSession,
        owner_id: UUID,
    ) -> OwnerDashboardResponse:
        """점주 대시보드 — 소유 매장, 평균 별점, 평점 목록.

        Store owner view of the owned store, its aggregate, and every rating
        with the rater's email.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            owner_id: 점주 사용자 ID (Owner user UUID, from the token)

        Returns:
            OwnerDashboardResponse: 점주 대시보드 (Owner dashboard)

        Raises:
            ReferenceNotFoundError: 소유 매장이 없을 때 (Owner has no store)
        """
        store: Store | None = await store_repository.get_by_owner(db, owner_id)
        if store is None:
            raise ReferenceNotFoundError("Store not found for this owner")

        average, count = await aggregation_service.rating_stats(db, store.id)
        ratings = await aggregation_service.ratings_for_store(db, store.id)
        return OwnerDashboardResponse(
            store=self._to_store_response(store, average, count),
            average_rating=average,
            rating_count=count,
            ratings=ratings,
        )


# 싱글턴 인스턴스: Singleton instance
directory_service: DirectoryService = DirectoryService()
