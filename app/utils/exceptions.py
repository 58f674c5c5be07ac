"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for the platform's error
taxonomy, so services and dependencies can raise domain errors without
specifying status codes at each call site.

Taxonomy:
    ValidationError        400  잘못된 입력 (Bad input shape or range)
    DuplicateEmailError    400  이메일 중복 (Email uniqueness violation)
    UnauthorizedError      401  인증 실패 (Missing, invalid, or expired token)
    ForbiddenError         403  권한 부족 (Role or self-scope mismatch)
    ReferenceNotFoundError 404  참조 대상 없음 (Foreign key target missing)
    InternalError          500  내부 오류 (Storage or unexpected failure)

Usage:
    from app.utils.exceptions import ValidationError, ForbiddenError
    raise ValidationError("Rating must be between 1 and 5.")
    raise ForbiddenError("You can only submit ratings as yourself")
"""

from fastapi import HTTPException, status


class ValidationError(HTTPException):
    """400 Bad Request 예외 — 입력 검증 실패 시 사용.

    400 Bad Request exception.
    Raised when a field violates its length, format, or range rule. The detail
    is a human-readable message naming the offending field.

    Args:
        detail: 오류 메시지 (Error message, default: "Invalid input")
    """

    def __init__(self, detail: str = "Invalid input") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class DuplicateEmailError(HTTPException):
    """400 Bad Request 예외 — 이메일 중복 시 사용.

    400 Bad Request exception for an email that is already registered,
    either on a user account or on a store.

    Args:
        detail: 오류 메시지 (Error message, default: "Email already exists")
    """

    def __init__(self, detail: str = "Email already exists") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 인증 실패 시 사용.

    401 Unauthorized exception.
    Raised when authentication is missing, invalid, or expired
    (e.g. missing JWT token, expired token, invalid credentials).

    Args:
        detail: 오류 메시지 (Error message, default: "Authentication required")
    """

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(HTTPException):
    """403 Forbidden 예외 — 권한 부족 시 사용.

    403 Forbidden exception.
    Raised when the authenticated role is not in the operation's role set,
    or when a self-scoped operation targets another user's identity.

    Args:
        detail: 오류 메시지 (Error message, default: "Insufficient permissions")
    """

    def __init__(self, detail: str = "Insufficient permissions") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class ReferenceNotFoundError(HTTPException):
    """404 Not Found 예외 — 참조한 리소스가 존재하지 않을 때 사용.

    404 Not Found exception.
    Raised when a write references a row that does not exist (foreign key
    rejection) or a lookup finds nothing.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class InternalError(HTTPException):
    """500 Internal Server Error 예외.

    500 Internal Server Error exception. The detail is always generic; the
    underlying cause is logged server-side, never returned to the client.
    """

    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
