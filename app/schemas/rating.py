"""평점 관련 Pydantic 요청/응답 스키마 정의.

Rating Pydantic request/response schema definitions.
Covers rating submission, the ratings directory, per-store summaries,
and the store owner dashboard.
"""

from typing import Any
from uuid import UUID

from pydantic import BaseModel

from app.schemas.store import StoreResponse


class RatingSubmit(BaseModel):
    """평점 제출 요청 스키마.

    Rating submission (insert or overwrite). ``user_id`` must equal the
    authenticated identity.

    Attributes:
        user_id: 평가자 UUID (Acting user, must match the token)
        store_id: 매장 UUID (Store being rated)
        rating: 별점 (Integer 1-5, checked in the service layer)
    """

    user_id: UUID | None = None
    store_id: UUID | None = None
    rating: Any = None  # 정수 1~5: 서비스에서 검사 (Integer 1-5, validated by service)


class RatingSubmitResponse(BaseModel):
    """평점 제출 응답 스키마."""

    message: str
    rating_id: str


class RatingResponse(BaseModel):
    """평점 목록 항목 스키마 — 평가자 이메일 포함.

    Rating directory entry joined with the rater's email.
    """

    id: str
    user_id: str
    store_id: str
    rating: int
    user_email: str


class StoreRatingEntry(BaseModel):
    """매장별 평점 항목 — 점주 화면용 (Rater email and value, owner view)."""

    user_email: str
    rating: int


class RatingSummary(BaseModel):
    """매장 평점 요약 스키마.

    Overall rating of a store next to the caller's own rating.

    Attributes:
        store_id: 매장 UUID (Store UUID)
        average_rating: 평균 별점 (Mean rounded to 1 decimal, 0.0 if none)
        rating_count: 평점 수 (Number of ratings)
        my_rating: 내 별점 (Caller's rating, null if not rated)
    """

    store_id: str
    average_rating: float
    rating_count: int
    my_rating: int | None = None


class OwnerDashboardResponse(BaseModel):
    """점주 대시보드 응답 스키마.

    Store owner view: the owned store, its aggregate, and every rating.
    """

    store: StoreResponse
    average_rating: float
    rating_count: int
    ratings: list[StoreRatingEntry]
