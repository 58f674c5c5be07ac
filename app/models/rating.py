"""평점 모델 — 사용자별 매장 평점 원장.

Rating model — The ledger of one rating per (user, store) pair.
Uniqueness is a database constraint, so concurrent submissions for the same
pair can never produce two rows.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Rating(Base):
    """평점 테이블.

    Rating table. A resubmission overwrites ``rating`` in place.

    Attributes:
        id: 고유 식별자 (Primary key UUID)
        user_id: 평가자 ID (Rater user UUID)
        store_id: 매장 ID (Rated store UUID)
        rating: 별점 1~5 (Star value, 1-5 inclusive)
        created_at: 최초 제출 일시 (First submission timestamp)
        updated_at: 최종 수정 일시 (Last overwrite timestamp)
    """

    __tablename__ = "ratings"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    store_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("stores.id", ondelete="CASCADE"),
        nullable=False,
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        UniqueConstraint("user_id", "store_id", name="uq_rating_user_store"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_rating_range"),
        Index("ix_ratings_store_id", "store_id"),
        Index("ix_ratings_user_id", "user_id"),
    )

    # Relationships
    user = relationship("User", back_populates="ratings")
    store = relationship("Store", back_populates="ratings")
