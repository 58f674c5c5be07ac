"""인증 API 테스트 — 회원가입, 로그인, 토큰 검증.

Auth API tests — Signup, login, and bearer token verification.
Covers credential round-trips, field validation messages, and token failures.
"""

from datetime import datetime, timedelta, timezone

import jwt
from httpx import AsyncClient

from app.config import settings
from tests.conftest import OWNER_PASSWORD, USER_PASSWORD, auth_header

AUTH = "/api/auth"
PROTECTED = "/api/data/stores"

NAME_20 = "Twenty Character Nam"
NAME_19 = "Nineteen Chars Name"


def _signup_body(**overrides) -> dict:
    body = {
        "name": NAME_20,
        "email": "newbie@test.com",
        "address": "221B Baker Street",
        "password": USER_PASSWORD,
    }
    body.update(overrides)
    return body


# ===== Signup =====

class TestSignup:
    """회원가입 테스트."""

    async def test_signup_success(self, client: AsyncClient):
        """20자 이름으로 회원가입 성공, role=user 토큰 발급."""
        assert len(NAME_20) == 20
        res = await client.post(f"{AUTH}/signup", json=_signup_body())
        assert res.status_code == 201
        data = res.json()
        assert data["role"] == "user"
        assert data["email"] == "newbie@test.com"
        assert data["store_id"] is None
        assert data["token_type"] == "bearer"
        assert data["access_token"]

    async def test_signup_name_too_short(self, client: AsyncClient):
        """19자 이름은 400, 이름 길이 메시지."""
        assert len(NAME_19) == 19
        res = await client.post(f"{AUTH}/signup", json=_signup_body(name=NAME_19))
        assert res.status_code == 400
        assert res.json()["detail"] == "Name must be at least 20 characters."

    async def test_signup_name_too_long(self, client: AsyncClient):
        res = await client.post(f"{AUTH}/signup", json=_signup_body(name="n" * 61))
        assert res.status_code == 400
        assert res.json()["detail"] == "Name cannot exceed 60 characters."

    async def test_signup_invalid_email(self, client: AsyncClient):
        res = await client.post(f"{AUTH}/signup", json=_signup_body(email="no-at-sign.com"))
        assert res.status_code == 400
        assert res.json()["detail"] == "Invalid email format."

    async def test_signup_missing_address(self, client: AsyncClient):
        res = await client.post(f"{AUTH}/signup", json=_signup_body(address=""))
        assert res.status_code == 400
        assert res.json()["detail"] == "Address is required."

    async def test_signup_weak_password(self, client: AsyncClient):
        """대문자가 없는 비밀번호는 400."""
        res = await client.post(f"{AUTH}/signup", json=_signup_body(password="alllowercase1!"))
        assert res.status_code == 400
        assert "uppercase" in res.json()["detail"]

    async def test_signup_duplicate_email(self, client: AsyncClient, rater):
        """이미 등록된 이메일은 400."""
        res = await client.post(f"{AUTH}/signup", json=_signup_body(email=rater.email))
        assert res.status_code == 400
        assert res.json()["detail"] == "Email already exists"

    async def test_signup_then_login_same_identity(self, client: AsyncClient):
        """가입한 비밀번호로 로그인하면 같은 사용자 ID."""
        signup = await client.post(f"{AUTH}/signup", json=_signup_body())
        login = await client.post(f"{AUTH}/login", json={
            "email": "newbie@test.com",
            "password": USER_PASSWORD,
        })
        assert login.status_code == 200
        assert login.json()["id"] == signup.json()["id"]


# ===== Login =====

class TestLogin:
    """로그인 테스트."""

    async def test_login_success(self, client: AsyncClient, rater):
        res = await client.post(f"{AUTH}/login", json={
            "email": rater.email,
            "password": USER_PASSWORD,
        })
        assert res.status_code == 200
        data = res.json()
        assert data["id"] == str(rater.id)
        assert data["role"] == "user"
        assert "password_hash" not in data

    async def test_login_token_carries_identity(self, client: AsyncClient, rater):
        """발급된 토큰의 sub/role 클레임 확인."""
        res = await client.post(f"{AUTH}/login", json={
            "email": rater.email,
            "password": USER_PASSWORD,
        })
        payload = jwt.decode(
            res.json()["access_token"],
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
        )
        assert payload["sub"] == str(rater.id)
        assert payload["role"] == "user"
        assert payload["email"] == rater.email
        assert "exp" in payload

    async def test_login_store_owner_gets_store_id(self, client: AsyncClient, owner, store):
        """점주 로그인 시 store_id 포함."""
        res = await client.post(f"{AUTH}/login", json={
            "email": owner.email,
            "password": OWNER_PASSWORD,
        })
        assert res.status_code == 200
        assert res.json()["store_id"] == str(store.id)

    async def test_login_wrong_password(self, client: AsyncClient, rater):
        res = await client.post(f"{AUTH}/login", json={
            "email": rater.email,
            "password": "Wrong@123",
        })
        assert res.status_code == 401
        assert res.json()["detail"] == "Invalid credentials"

    async def test_login_unknown_email(self, client: AsyncClient):
        """존재하지 않는 이메일도 동일한 401 메시지."""
        res = await client.post(f"{AUTH}/login", json={
            "email": "ghost@test.com",
            "password": USER_PASSWORD,
        })
        assert res.status_code == 401
        assert res.json()["detail"] == "Invalid credentials"

    async def test_unknown_email_dummy_hash_uses_threadpool(self, client: AsyncClient, monkeypatch):
        """더미 해시는 이벤트 루프 밖(스레드풀)에서 한 번만 생성."""
        from app.services import auth_service as auth_module

        calls: list[str] = []
        real_hash_async = auth_module.hash_password_async

        async def _recording_hash_async(raw: str) -> str:
            calls.append(raw)
            return await real_hash_async(raw)

        monkeypatch.setattr(auth_module, "hash_password_async", _recording_hash_async)
        monkeypatch.setattr(auth_module.auth_service, "_dummy_hash", None)

        for _ in range(2):
            res = await client.post(f"{AUTH}/login", json={
                "email": "ghost@test.com",
                "password": USER_PASSWORD,
            })
            assert res.status_code == 401
        assert len(calls) == 1
        assert auth_module.auth_service._dummy_hash is not None

    async def test_login_missing_fields(self, client: AsyncClient):
        res = await client.post(f"{AUTH}/login", json={"email": "rater@test.com"})
        assert res.status_code == 400


# ===== Token gate =====

class TestTokenGate:
    """토큰 검증 테스트."""

    async def test_missing_token(self, client: AsyncClient):
        res = await client.get(PROTECTED)
        assert res.status_code == 401
        assert res.json()["detail"] == "Access token required"

    async def test_garbage_token(self, client: AsyncClient):
        res = await client.get(PROTECTED, headers=auth_header("invalid.token.here"))
        assert res.status_code == 401
        assert res.json()["detail"] == "Invalid or expired token"

    async def test_expired_token(self, client: AsyncClient, rater):
        token = jwt.encode(
            {
                "sub": str(rater.id),
                "email": rater.email,
                "role": "user",
                "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
            },
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
        res = await client.get(PROTECTED, headers=auth_header(token))
        assert res.status_code == 401

    async def test_wrong_secret(self, client: AsyncClient, rater):
        token = jwt.encode(
            {
                "sub": str(rater.id),
                "role": "user",
                "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
            },
            "not-the-server-secret",
            algorithm=settings.JWT_ALGORITHM,
        )
        res = await client.get(PROTECTED, headers=auth_header(token))
        assert res.status_code == 401

    async def test_unknown_role_claim(self, client: AsyncClient, rater):
        """닫힌 역할 집합 밖의 role 클레임은 401."""
        token = jwt.encode(
            {
                "sub": str(rater.id),
                "role": "superuser",
                "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
            },
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
        res = await client.get(PROTECTED, headers=auth_header(token))
        assert res.status_code == 401

    async def test_valid_token(self, client: AsyncClient, rater_token):
        res = await client.get(PROTECTED, headers=auth_header(rater_token))
        assert res.status_code == 200
