"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    user: 사용자 및 역할 열거형 (User and the UserRole enum)
    store: 매장 (Store, one per owner)
    rating: 평점 원장 (Rating ledger, one row per user/store pair)
"""

from app.models.user import User, UserRole
from app.models.store import Store
from app.models.rating import Rating

__all__ = [
    "User", "UserRole",
    "Store",
    "Rating",
]
