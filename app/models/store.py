"""매장 관련 SQLAlchemy ORM 모델 정의.

Store SQLAlchemy ORM model definition.
A store is always created together with its owner account and belongs to
exactly one owner; deleting the owner deletes the store.

Tables:
    - stores: 평가 대상 매장 (Stores that can be rated)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Store(Base):
    """매장 모델 — 평가 대상 사업장.

    Store model — A business that users rate.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        name: 매장 이름 (Store name, 20-60 chars)
        email: 매장 이메일 (Store contact email, unique)
        address: 매장 주소 (Store address, up to 400 chars)
        owner_id: 점주 FK (Owner user, unique: one store per owner)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)

    Relationships:
        owner: 점주 계정 (Owner account)
        ratings: 받은 평점 목록 (Ratings received, cascade delete)
    """

    __tablename__ = "stores"

    # 매장 고유 식별자: Store unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 매장 이름: Store display name
    name: Mapped[str] = mapped_column(String(60), nullable=False)
    # 매장 이메일: Store contact email (전역 고유, globally unique)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    # 매장 주소: Physical address of the store
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 점주 FK: Owner (CASCADE: 점주 삭제 시 매장도 삭제, UNIQUE: 점주당 매장 1개)
    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    # 생성 일시: Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시: Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        CheckConstraint("length(name) >= 20 AND length(name) <= 60", name="ck_store_name_length"),
        CheckConstraint("length(address) <= 400", name="ck_store_address_length"),
    )

    # 관계: Relationships
    owner = relationship("User", back_populates="store")
    ratings = relationship("Rating", back_populates="store", cascade="all, delete-orphan", passive_deletes=True)
