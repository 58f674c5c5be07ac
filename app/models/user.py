"""사용자 및 역할 관련 SQLAlchemy ORM 모델 정의.

User and role SQLAlchemy ORM model definitions.
Every account carries exactly one role from a closed set; the role is fixed
at creation time and only the password hash is ever updated afterwards.

Tables:
    - users: 사용자 계정 (User accounts: admins, raters, store owners)
"""

import enum
import uuid
from datetime import datetime, timezone
from sqlalchemy import CheckConstraint, DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class UserRole(str, enum.Enum):
    """사용자 역할 — 닫힌 열거형.

    Closed set of account roles.
        admin: 계정/매장 관리 (Manages accounts and stores)
        user: 매장 평가 (Rates stores)
        store_owner: 자기 매장 평점 조회 (Views ratings of the owned store)
    """

    ADMIN = "admin"
    USER = "user"
    STORE_OWNER = "store_owner"


class User(Base):
    """사용자 모델 — 시스템 사용자 계정 정보.

    User model — System user account information.
    Email is globally unique and doubles as the login identifier.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        name: 이름 (Display name, 20-60 chars)
        email: 이메일 (Login email, unique)
        password_hash: bcrypt 해시된 비밀번호 (bcrypt-hashed password)
        address: 주소 (Postal address, up to 400 chars)
        role: 역할 (One of UserRole values)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)

    Relationships:
        store: 소유 매장 (Owned store, store owners only, cascade delete)
        ratings: 작성한 평점 목록 (Ratings given, cascade delete)
    """

    __tablename__ = "users"

    # 사용자 고유 식별자: User unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 이름: Display name (20~60자, DB 레벨에서도 검사)
    name: Mapped[str] = mapped_column(String(60), nullable=False)
    # 이메일: Login email (전역 고유, globally unique)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    # 비밀번호 해시: bcrypt hashed password (평문 저장 금지, never store plaintext)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    # 주소: Postal address
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 역할: admin | user | store_owner (생성 후 변경 불가, immutable)
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    # 생성 일시: Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시: Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        CheckConstraint("length(name) >= 20 AND length(name) <= 60", name="ck_user_name_length"),
        CheckConstraint("length(address) <= 400", name="ck_user_address_length"),
        CheckConstraint("role IN ('admin', 'user', 'store_owner')", name="ck_user_role"),
        Index("ix_users_role", "role"),
    )

    # 관계: Relationships
    store = relationship("Store", back_populates="owner", uselist=False, cascade="all, delete-orphan", passive_deletes=True)
    ratings = relationship("Rating", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
