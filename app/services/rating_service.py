"""평점 서비스 — 평점 원장 쓰기 비즈니스 로직.

Rating Service — Writes to the rating ledger.
A submission inserts the (user, store) rating or overwrites the existing
value; there is no separate edit operation. The uniqueness constraint in the
database, not a read-then-write check here, decides which of the two happens.
"""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.rating_repository import rating_repository
from app.repositories.store_repository import store_repository
from app.repositories.user_repository import user_repository
from app.utils.exceptions import (
    ReferenceNotFoundError,
    UnauthorizedError,
    ValidationError,
)
from app.utils.validation import check_rating, ensure_valid

logger = logging.getLogger(__name__)


class RatingService:
    """평점 원장 쓰기를 처리하는 서비스.

    Service handling rating submissions. The acting user id must already
    have been matched against the token by the caller.
    """

    async def submit_rating(
        self,
        db: AsyncSession,
        acting_user_id: UUID,
        store_id: UUID | None,
        value: object,
    ) -> UUID:
        """평점을 제출합니다 (삽입 또는 덮어쓰기).

        Submit a rating: insert, or overwrite the value on conflict.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            acting_user_id: 인증된 평가자 ID (Authenticated rater UUID)
            store_id: 매장 ID (Store UUID)
            value: 별점, 정수 1~5 (Star value, integer 1-5)

        Returns:
            UUID: 평점 ID (Rating id, stable across overwrites)

        Raises:
            ValidationError: 범위를 벗어난 별점 또는 매장 ID 누락
                             (Out-of-range value or missing store id)
            ReferenceNotFoundError: 존재하지 않는 매장 (FK rejected the store id)
            UnauthorizedError: 토큰은 유효하나 계정이 삭제됨
                               (Token outlived the rater account)
        """
        ensure_valid(check_rating(value))
        if store_id is None:
            raise ValidationError("Store ID is required")

        try:
            # SAVEPOINT: FK 위반 시 이 문장만 롤백 (Only this statement rolls back on FK failure)
            async with db.begin_nested():
                rating_id: UUID = await rating_repository.upsert(
                    db, acting_user_id, store_id, value
                )
        except IntegrityError:
            await self._raise_missing_reference(db, acting_user_id, store_id)
            raise

        logger.info(
            "Rating submitted: user_id=%s store_id=%s rating=%s", acting_user_id, store_id, value
        )
        return rating_id

    async def _raise_missing_reference(
        self,
        db: AsyncSession,
        acting_user_id: UUID,
        store_id: UUID,
    ) -> None:
        """FK 위반의 원인(매장 또는 평가자)을 찾아 알맞은 오류를 냅니다.

        Work out which foreign key the upsert tripped over and raise the
        matching error. Returns only when both rows exist.
        """
        if not await store_repository.exists(db, {"id": store_id}):
            raise ReferenceNotFoundError("Store not found")
        if await user_repository.get_by_id(db, acting_user_id) is None:
            logger.warning("Rating rejected: user_id=%s no longer exists", acting_user_id)
            raise UnauthorizedError("User account no longer exists")


# 싱글턴 인스턴스: Singleton instance
rating_service: RatingService = RatingService()
