"""매장 관련 Pydantic 요청/응답 스키마 정의.

Store Pydantic request/response schema definitions.
Covers store provisioning and the store directory with rating aggregates.
"""

from datetime import datetime
from pydantic import BaseModel


class StoreCreate(BaseModel):
    """매장 생성 요청 스키마 (관리자용).

    Store creation request schema. The owner account is derived from these
    fields: same email and address, name "<store name> Owner".

    Attributes:
        name: 매장 이름 (Store name, 20-60 chars)
        email: 매장 이메일 (Store and owner login email, unique)
        address: 매장 주소 (Store address, 1-400 chars)
    """

    name: str | None = None
    email: str | None = None
    address: str | None = None


class StoreCreatedResponse(BaseModel):
    """매장+점주 생성 응답 스키마."""

    message: str
    store_id: str
    owner_id: str


class StoreResponse(BaseModel):
    """매장 응답 스키마.

    Store directory entry with its current rating aggregate.

    Attributes:
        id: 매장 UUID (Store unique identifier)
        name: 매장 이름 (Store name)
        email: 매장 이메일 (Store email)
        address: 매장 주소 (Store address)
        owner_id: 점주 UUID (Owner user UUID)
        average_rating: 평균 별점, 소수 첫째 자리 (Mean rating rounded to 1 decimal, 0.0 if none)
        rating_count: 평점 수 (Number of ratings)
        created_at: 생성 일시 (Creation timestamp)
    """

    id: str
    name: str
    email: str
    address: str | None
    owner_id: str
    average_rating: float = 0.0
    rating_count: int = 0
    created_at: datetime
