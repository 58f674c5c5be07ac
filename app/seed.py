"""초기 데이터 시드 스크립트 — 테이블 및 관리자 계정 생성.

Seed script — Creates the tables and the bootstrap admin account.
Administrators can only be created by another administrator, so the first
one has to come from here.

Usage:
    python -m app.seed

Creates:
    - users, stores, ratings 테이블 (Tables from ORM metadata)
    - 1개 관리자 계정: SEED_ADMIN_EMAIL / SEED_ADMIN_PASSWORD (1 admin user)
"""

import asyncio
import logging

from sqlalchemy import select

from app.config import settings
from app.database import Base, async_session, engine
from app.logging_config import configure_logging
from app.models import User, UserRole
from app.services.auth_service import auth_service

logger = logging.getLogger(__name__)


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Create the tables if they don't exist, then insert the admin account.

    Idempotent: 관리자가 이미 있으면 건너뜁니다 (Skips if an admin exists).
    """
    try:
        # 테이블 생성: DDL 실행 (Create all tables from ORM metadata)
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        async with async_session() as db:
            result = await db.execute(select(User.id).where(User.role == UserRole.ADMIN.value).limit(1))
            if result.scalar_one_or_none() is not None:
                logger.info("Admin already exists. Skipping.")
                return

            admin: User = await auth_service.create_account(
                db,
                name=settings.SEED_ADMIN_NAME,
                email=settings.SEED_ADMIN_EMAIL,
                address=settings.SEED_ADMIN_ADDRESS,
                raw_password=settings.SEED_ADMIN_PASSWORD,
                role=UserRole.ADMIN,
            )
            await db.commit()
            logger.info("Seeded admin user: id=%s email=%s", admin.id, admin.email)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    configure_logging()
    asyncio.run(seed())
