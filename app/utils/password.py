"""비밀번호 해싱 및 검증 유틸리티 모듈.

Password hashing and verification utility module.
Uses bcrypt directly for secure password storage.
Passwords are never stored in plain text — always hashed with bcrypt.

bcrypt is deliberately slow, so request handlers use the ``*_async`` variants
which run the work in the thread pool instead of on the event loop.
"""

import bcrypt
from starlette.concurrency import run_in_threadpool

from app.config import settings

BCRYPT_MAX_BYTES: int = 72


def hash_password(password: str) -> str:
    """평문 비밀번호를 bcrypt 해시로 변환합니다.

    Hash a plain text password using bcrypt.
    The resulting hash includes a random salt, making each hash unique
    even for identical passwords.

    Args:
        password: 평문 비밀번호 (Plain text password to hash)

    Returns:
        str: bcrypt 해시 문자열 (Bcrypt hash string, ~60 chars)

    Example:
        hashed = hash_password("Valid@123")
        # "$2b$10$LJ3m4ys3..."
    """
    salt: bytes = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """평문 비밀번호와 bcrypt 해시를 비교 검증합니다.

    Verify a plain text password against a bcrypt hash.
    Uses constant-time comparison to prevent timing attacks.

    Args:
        plain_password: 검증할 평문 비밀번호 (Plain text password to verify)
        hashed_password: 저장된 bcrypt 해시 (Stored bcrypt hash to compare against)

    Returns:
        bool: 일치하면 True, 불일치하면 False (True if password matches hash)
    """
    encoded: bytes = plain_password.encode("utf-8")
    # bcrypt는 72바이트를 넘는 입력을 거부함 (bcrypt rejects inputs over 72 bytes)
    if len(encoded) > BCRYPT_MAX_BYTES:
        return False
    return bcrypt.checkpw(encoded, hashed_password.encode("utf-8"))


async def hash_password_async(password: str) -> str:
    """스레드 풀에서 hash_password를 실행합니다 (Run hash_password off the event loop)."""
    return await run_in_threadpool(hash_password, password)


async def verify_password_async(plain_password: str, hashed_password: str) -> bool:
    """스레드 풀에서 verify_password를 실행합니다 (Run verify_password off the event loop)."""
    return await run_in_threadpool(verify_password, plain_password, hashed_password)
