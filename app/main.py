"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어, 예외 핸들러, 라우터 등록.

FastAPI application entry point — Middleware, exception handlers, and router
registration. Configures logging, CORS, the Axiom request logger, the
heartbeat task, and mounts every API router under /api.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from app.database import engine
from app.logging_config import configure_logging
from app.middleware.axiom_logging import AxiomLoggingMiddleware
from app.utils.exceptions import InternalError

configure_logging()
logger = logging.getLogger("app")


async def _heartbeat(interval: float) -> None:
    """주기적 생존 로그 — Log a liveness line every ``interval`` seconds."""
    while True:
        await asyncio.sleep(interval)
        logger.info("heartbeat - process is alive")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """애플리케이션 수명 주기 — 하트비트 시작, 종료 시 엔진 정리.

    Start the heartbeat task on startup; cancel it and dispose the engine
    pool on shutdown.
    """
    heartbeat: asyncio.Task[None] | None = None
    if settings.HEARTBEAT_INTERVAL_SECONDS > 0:
        heartbeat = asyncio.create_task(_heartbeat(settings.HEARTBEAT_INTERVAL_SECONDS))
    logger.info("%s started", settings.APP_NAME)
    try:
        yield
    finally:
        if heartbeat is not None:
            heartbeat.cancel()
        await engine.dispose()
        logger.info("%s stopped", settings.APP_NAME)


app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Axiom API 로깅 미들웨어: Axiom API request/response logging
# CORS보다 먼저 등록하여 모든 요청을 캡처 (Registered before CORS to capture all requests)
app.add_middleware(AxiomLoggingMiddleware)

# CORS 미들웨어: Cross-Origin Resource Sharing middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _internal_error_response() -> JSONResponse:
    error = InternalError()
    return JSONResponse(status_code=error.status_code, content={"detail": error.detail})


# ---------------------------------------------------------------------------
# 예외 핸들러: Exception handlers
# ---------------------------------------------------------------------------
@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """요청 본문 스키마 오류를 400으로 반환 (첫 번째 오류 메시지).

    Report request schema failures as 400 with the first error message.
    """
    errors = exc.errors()
    detail: str = "Invalid request"
    if errors:
        first = errors[0]
        location: str = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        detail = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    return JSONResponse(status_code=400, content={"detail": detail})


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """처리되지 않은 DB 오류 — 로그 후 일반 메시지로 500 반환.

    Log an untranslated storage failure and return a generic 500.
    """
    logger.exception("Storage failure on %s %s", request.method, request.url.path)
    return _internal_error_response()


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """예상치 못한 오류 — 로그 후 일반 메시지로 500 반환 (Log and return a generic 500)."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _internal_error_response()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# 라우터 등록: Router registration, all under /api
# ---------------------------------------------------------------------------
from app.api.admin import admin_router  # noqa: E402
from app.api.auth import router as auth_router  # noqa: E402
from app.api.data import router as data_router  # noqa: E402
from app.api.owner import router as owner_router  # noqa: E402
from app.api.ratings import router as ratings_router  # noqa: E402
from app.api.stores import router as stores_router  # noqa: E402
from app.api.users import router as users_router  # noqa: E402

app.include_router(auth_router, prefix="/api/auth", tags=["Auth"])
app.include_router(data_router, prefix="/api/data", tags=["Directory"])
app.include_router(admin_router, prefix="/api/admin")
app.include_router(users_router, prefix="/api/users", tags=["Users"])
app.include_router(ratings_router, prefix="/api/ratings", tags=["Ratings"])
app.include_router(stores_router, prefix="/api/stores", tags=["Stores"])
app.include_router(owner_router, prefix="/api/owner", tags=["Owner"])
