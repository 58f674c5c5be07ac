"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite DB, session, and httpx client fixtures.
Each test gets a fresh database (aiosqlite, foreign keys on, SAVEPOINT
support) so no cleanup between tests is needed.
"""

import os

# 앱 임포트 전에 설정: Settings must be in place before app modules import
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("HEARTBEAT_INTERVAL_SECONDS", "0")
os.environ.setdefault("AXIOM_API_TOKEN", "")

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.database import Base, enable_sqlite_constraints, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Rating, Store, User, UserRole  # noqa: E402
from app.utils.jwt import create_access_token  # noqa: E402
from app.utils.password import hash_password  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite://"

USER_PASSWORD = "Valid@123"
OWNER_PASSWORD = "Store@123"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진 — 단일 연결을 공유하는 인메모리 DB."""
    eng = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    enable_sqlite_constraints(eng)

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def create_user(
    db: AsyncSession,
    email: str,
    role: UserRole = UserRole.USER,
    name: str = "Regular Rating Person",
    password: str = USER_PASSWORD,
) -> User:
    """사용자를 직접 생성합니다 (Insert a user bypassing the API)."""
    user = User(
        name=name,
        email=email,
        address="42 Test Street, Springfield",
        password_hash=hash_password(password),
        role=role.value,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


async def create_store(
    db: AsyncSession,
    owner: User,
    email: str,
    name: str = "Corner Coffee Roasters Ltd",
) -> Store:
    """매장을 직접 생성합니다 (Insert a store bypassing the API)."""
    s = Store(name=name, email=email, address="1 Market Square", owner_id=owner.id)
    db.add(s)
    await db.flush()
    await db.refresh(s)
    return s


async def add_rating(db: AsyncSession, user: User, store: Store, value: int) -> Rating:
    r = Rating(user_id=user.id, store_id=store.id, rating=value)
    db.add(r)
    await db.flush()
    return r


@pytest_asyncio.fixture
async def admin_user(db: AsyncSession) -> User:
    """관리자 사용자를 생성합니다."""
    return await create_user(db, "admin@test.com", UserRole.ADMIN, name="Platform Test Administrator")


@pytest_asyncio.fixture
async def rater(db: AsyncSession) -> User:
    """일반 사용자(평가자)를 생성합니다."""
    return await create_user(db, "rater@test.com")


@pytest_asyncio.fixture
async def other_rater(db: AsyncSession) -> User:
    """두 번째 일반 사용자를 생성합니다."""
    return await create_user(db, "other@test.com", name="Another Regular Rater")


@pytest_asyncio.fixture
async def owner(db: AsyncSession) -> User:
    """점주 사용자를 생성합니다."""
    return await create_user(
        db, "owner@test.com", UserRole.STORE_OWNER,
        name="Corner Coffee Roasters Ltd Owner", password=OWNER_PASSWORD,
    )


@pytest_asyncio.fixture
async def store(db: AsyncSession, owner: User) -> Store:
    """점주 소유의 테스트 매장을 생성합니다."""
    return await create_store(db, owner, "owner@test.com")


def make_token(user: User) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token({
        "sub": str(user.id),
        "email": user.email,
        "role": user.role,
    })


@pytest.fixture
def admin_token(admin_user: User) -> str:
    return make_token(admin_user)


@pytest.fixture
def rater_token(rater: User) -> str:
    return make_token(rater)


@pytest.fixture
def other_token(other_rater: User) -> str:
    return make_token(other_rater)


@pytest.fixture
def owner_token(owner: User) -> str:
    return make_token(owner)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
