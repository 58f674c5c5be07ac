"""입력 검증 규칙 모듈.

Input validation rules shared by signup, admin provisioning, password
rotation, and rating submission. Each ``check_*`` function returns an error
message or None; ``ensure_*`` helpers raise ValidationError with the first
failing message so that validation always happens before any storage call.

Rules:
    name: 20~60자 (20-60 characters)
    address: 1~400자 (1-400 characters)
    password: 8~16자, 대문자 1개 이상, 특수문자 !@#$%^&*() 1개 이상
    email: local@domain.tld 형태
    rating: 1~5 정수 (Integer 1-5 inclusive)
"""

import re
from typing import Any

from app.utils.exceptions import ValidationError

NAME_MIN_LENGTH: int = 20
NAME_MAX_LENGTH: int = 60
ADDRESS_MAX_LENGTH: int = 400
PASSWORD_MIN_LENGTH: int = 8
PASSWORD_MAX_LENGTH: int = 16
RATING_MIN: int = 1
RATING_MAX: int = 5

_EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_UPPERCASE_PATTERN = re.compile(r"[A-Z]")
_SPECIAL_PATTERN = re.compile(r"[!@#$%^&*()]")


def check_name(name: str | None) -> str | None:
    if not name or len(name) < NAME_MIN_LENGTH:
        return f"Name must be at least {NAME_MIN_LENGTH} characters."
    if len(name) > NAME_MAX_LENGTH:
        return f"Name cannot exceed {NAME_MAX_LENGTH} characters."
    return None


def check_address(address: str | None) -> str | None:
    if not address:
        return "Address is required."
    if len(address) > ADDRESS_MAX_LENGTH:
        return f"Address cannot exceed {ADDRESS_MAX_LENGTH} characters."
    return None


def check_password(password: str | None) -> str | None:
    """비밀번호 규칙 검사 — Length first, then uppercase, then special char."""
    length_message = f"Password must be {PASSWORD_MIN_LENGTH}-{PASSWORD_MAX_LENGTH} characters."
    if not password or len(password) < PASSWORD_MIN_LENGTH:
        return length_message
    if len(password) > PASSWORD_MAX_LENGTH:
        return length_message
    if not _UPPERCASE_PATTERN.search(password):
        return "Password must include at least one uppercase letter."
    if not _SPECIAL_PATTERN.search(password):
        return "Password must include at least one special character (!@#$%^&*())."
    return None


def check_email(email: str | None) -> str | None:
    if not email or not _EMAIL_PATTERN.fullmatch(email):
        return "Invalid email format."
    return None


def check_rating(rating: Any) -> str | None:
    """별점 검사 — bool은 정수로 취급하지 않음 (bool is not accepted as an int)."""
    if isinstance(rating, bool) or not isinstance(rating, int):
        return f"Rating must be between {RATING_MIN} and {RATING_MAX}."
    if rating < RATING_MIN or rating > RATING_MAX:
        return f"Rating must be between {RATING_MIN} and {RATING_MAX}."
    return None


def ensure_valid(*messages: str | None) -> None:
    """첫 번째 오류 메시지로 ValidationError를 발생시킵니다.

    Raise ValidationError carrying the first non-empty message, in the order
    the checks were given.

    Raises:
        ValidationError: 하나 이상의 검사가 실패한 경우 (When any check failed)
    """
    for message in messages:
        if message:
            raise ValidationError(message)


def ensure_valid_account(name: str | None, email: str | None, address: str | None, password: str | None) -> None:
    """계정 생성 입력 검사 — name, email, address, password 순서."""
    ensure_valid(
        check_name(name),
        check_email(email),
        check_address(address),
        check_password(password),
    )


def ensure_valid_store(name: str | None, email: str | None, address: str | None) -> None:
    """매장 생성 입력 검사 — name, email, address 순서."""
    ensure_valid(
        check_name(name),
        check_email(email),
        check_address(address),
    )
