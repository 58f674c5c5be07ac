"""평점 제출 API 테스트.

Rating submission API tests — Upsert semantics, self-scope enforcement,
value validation, unknown store and deleted rater handling, and
concurrent submissions for the same (user, store) pair.
"""

import asyncio
import uuid
from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.database import Base, enable_sqlite_constraints, get_db
from app.main import app
from app.models import Rating, User, UserRole
from tests.conftest import auth_header, create_store, create_user, make_token

URL = "/api/ratings"


def _body(user, store, value) -> dict:
    return {"user_id": str(user.id), "store_id": str(store.id), "rating": value}


class TestSubmitRating:
    """평점 제출 테스트."""

    async def test_submit_rating(self, client: AsyncClient, db, rater, rater_token, store):
        """평점 제출 성공."""
        res = await client.post(URL, json=_body(rater, store, 4), headers=auth_header(rater_token))
        assert res.status_code == 201
        data = res.json()
        assert data["message"] == "Rating submitted/updated successfully"
        assert data["rating_id"]

        value = await db.scalar(
            select(Rating.rating).where(Rating.user_id == rater.id, Rating.store_id == store.id)
        )
        assert value == 4

    async def test_resubmit_overwrites(self, client: AsyncClient, db, rater, rater_token, store):
        """같은 매장에 다시 제출하면 한 행만 남고 마지막 값이 저장됨."""
        first = await client.post(URL, json=_body(rater, store, 2), headers=auth_header(rater_token))
        second = await client.post(URL, json=_body(rater, store, 5), headers=auth_header(rater_token))
        assert first.status_code == 201
        assert second.status_code == 201
        assert first.json()["rating_id"] == second.json()["rating_id"]

        rows = (await db.execute(
            select(Rating.rating).where(Rating.user_id == rater.id, Rating.store_id == store.id)
        )).scalars().all()
        assert rows == [5]

    async def test_ratings_from_different_users_are_separate(
        self, client: AsyncClient, db, rater, rater_token, other_rater, other_token, store,
    ):
        await client.post(URL, json=_body(rater, store, 5), headers=auth_header(rater_token))
        await client.post(URL, json=_body(other_rater, store, 1), headers=auth_header(other_token))
        count = await db.scalar(select(func.count()).select_from(Rating).where(Rating.store_id == store.id))
        assert count == 2

    async def test_rating_as_another_user_forbidden(
        self, client: AsyncClient, db, rater_token, other_rater, store,
    ):
        """다른 사용자 ID로 제출하면 403, 평점 미생성."""
        res = await client.post(URL, json=_body(other_rater, store, 3), headers=auth_header(rater_token))
        assert res.status_code == 403
        assert res.json()["detail"] == "You can only submit ratings as yourself"
        assert await db.scalar(select(func.count()).select_from(Rating)) == 0

    async def test_rating_without_user_id_forbidden(self, client: AsyncClient, rater_token, store):
        res = await client.post(
            URL, json={"store_id": str(store.id), "rating": 3}, headers=auth_header(rater_token)
        )
        assert res.status_code == 403

    async def test_forbidden_checked_before_value(self, client: AsyncClient, rater_token, other_rater, store):
        """본인 확인이 별점 검증보다 먼저."""
        res = await client.post(URL, json=_body(other_rater, store, 9), headers=auth_header(rater_token))
        assert res.status_code == 403

    async def test_rating_out_of_range(self, client: AsyncClient, rater, rater_token, store):
        for value in (0, 6, -1):
            res = await client.post(URL, json=_body(rater, store, value), headers=auth_header(rater_token))
            assert res.status_code == 400
            assert res.json()["detail"] == "Rating must be between 1 and 5."

    async def test_rating_not_integer(self, client: AsyncClient, rater, rater_token, store):
        """정수가 아닌 값(문자열, 실수, 불리언)은 400."""
        for value in ("5", 3.5, True, None):
            res = await client.post(URL, json=_body(rater, store, value), headers=auth_header(rater_token))
            assert res.status_code == 400

    async def test_missing_store_id(self, client: AsyncClient, rater, rater_token):
        res = await client.post(
            URL, json={"user_id": str(rater.id), "rating": 3}, headers=auth_header(rater_token)
        )
        assert res.status_code == 400
        assert res.json()["detail"] == "Store ID is required"

    async def test_unknown_store(self, client: AsyncClient, db, rater, rater_token):
        """존재하지 않는 매장은 404, 세션은 계속 사용 가능."""
        res = await client.post(
            URL,
            json={"user_id": str(rater.id), "store_id": str(uuid.uuid4()), "rating": 3},
            headers=auth_header(rater_token),
        )
        assert res.status_code == 404
        assert res.json()["detail"] == "Store not found"
        assert await db.scalar(select(func.count()).select_from(Rating)) == 0

    async def test_malformed_store_id(self, client: AsyncClient, rater, rater_token):
        """UUID 형식이 아닌 store_id는 400."""
        res = await client.post(
            URL,
            json={"user_id": str(rater.id), "store_id": "not-a-uuid", "rating": 3},
            headers=auth_header(rater_token),
        )
        assert res.status_code == 400

    async def test_rating_requires_token(self, client: AsyncClient, rater, store):
        res = await client.post(URL, json=_body(rater, store, 3))
        assert res.status_code == 401

    async def test_admin_may_rate_as_self(self, client: AsyncClient, admin_user, admin_token, store):
        """인증된 역할이면 누구나 본인 명의로 제출 가능."""
        res = await client.post(URL, json=_body(admin_user, store, 5), headers=auth_header(admin_token))
        assert res.status_code == 201

    async def test_deleted_rater_with_live_token(self, client: AsyncClient, db, rater, rater_token, store):
        """계정 삭제 후에도 토큰이 유효하면 401, 매장 누락으로 보고하지 않음."""
        await db.execute(delete(User).where(User.id == rater.id))
        await db.flush()

        res = await client.post(URL, json=_body(rater, store, 4), headers=auth_header(rater_token))
        assert res.status_code == 401
        assert res.json()["detail"] == "User account no longer exists"
        assert await db.scalar(select(func.count()).select_from(Rating)) == 0


# ---------------------------------------------------------------------------
# 동시 제출: 요청마다 별도 세션을 쓰는 파일 기반 DB
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def ledger_session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """요청별 연결이 가능한 파일 SQLite DB의 세션 팩토리."""
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}")
    enable_sqlite_constraints(eng)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(eng, class_=AsyncSession, expire_on_commit=False)
    await eng.dispose()


@pytest_asyncio.fixture
async def ledger_client(
    ledger_session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    """요청마다 새 세션을 여는 클라이언트 (One session per request, as in production)."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with ledger_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


class TestConcurrentSubmission:
    """같은 (사용자, 매장) 쌍의 동시 제출 테스트."""

    async def test_concurrent_same_pair_keeps_one_row(
        self, ledger_client: AsyncClient, ledger_session_factory,
    ):
        """동시에 두 번 제출해도 한 행만 남고 값은 둘 중 하나."""
        async with ledger_session_factory() as session:
            rater = await create_user(session, "racer@test.com")
            owner = await create_user(session, "shop@test.com", UserRole.STORE_OWNER)
            store = await create_store(session, owner, "shop@test.com")
            await session.commit()
        token = make_token(rater)

        first, second = await asyncio.gather(
            ledger_client.post(URL, json=_body(rater, store, 2), headers=auth_header(token)),
            ledger_client.post(URL, json=_body(rater, store, 5), headers=auth_header(token)),
        )
        assert first.status_code == 201
        assert second.status_code == 201
        assert first.json()["rating_id"] == second.json()["rating_id"]

        async with ledger_session_factory() as session:
            rows = (await session.execute(
                select(Rating.rating).where(Rating.user_id == rater.id, Rating.store_id == store.id)
            )).scalars().all()
        assert len(rows) == 1
        assert rows[0] in (2, 5)
