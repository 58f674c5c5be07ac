"""시드 스크립트 테스트.

Seed script tests — Admin bootstrap is idempotent and the engine is always
disposed, including on the "admin already exists" early exit.
"""

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app import seed as seed_module
from app.config import settings
from app.models import User, UserRole


class _DisposeCountingEngine:
    """테스트 엔진을 감싸 dispose 호출만 기록합니다.

    Delegates begin() to the test engine; dispose() is counted instead of
    run so the in-memory database survives between seed runs.
    """

    def __init__(self, inner: AsyncEngine) -> None:
        self.inner = inner
        self.disposed = 0

    def begin(self):
        return self.inner.begin()

    async def dispose(self) -> None:
        self.disposed += 1


class TestSeed:
    """관리자 시드 테스트."""

    async def test_seed_twice_creates_one_admin_and_always_disposes(self, engine, monkeypatch):
        counting = _DisposeCountingEngine(engine)
        factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        monkeypatch.setattr(seed_module, "engine", counting)
        monkeypatch.setattr(seed_module, "async_session", factory)

        await seed_module.seed()
        assert counting.disposed == 1

        await seed_module.seed()
        assert counting.disposed == 2

        async with factory() as session:
            admins = (await session.execute(
                select(User.email).where(User.role == UserRole.ADMIN.value)
            )).scalars().all()
        assert admins == [settings.SEED_ADMIN_EMAIL]

    async def test_dispose_runs_when_seeding_fails(self, engine, monkeypatch):
        counting = _DisposeCountingEngine(engine)
        factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        monkeypatch.setattr(seed_module, "engine", counting)
        monkeypatch.setattr(seed_module, "async_session", factory)

        async def _failing_create_account(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(seed_module.auth_service, "create_account", _failing_create_account)

        with pytest.raises(RuntimeError):
            await seed_module.seed()
        assert counting.disposed == 1

        async with factory() as session:
            count = await session.scalar(select(func.count()).select_from(User))
        assert count == 0
