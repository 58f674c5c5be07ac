"""관리자 API 라우터 패키지 — 모든 관리자 엔드포인트 통합.

Admin API Router package — Aggregates the admin-only provisioning endpoints
into a single router for inclusion in the FastAPI application.

Included routers:
    - users: 관리자/일반 사용자 생성 (Admin and user account creation)
    - stores: 매장+점주 생성 (Store and owner creation)
"""

from fastapi import APIRouter

from app.api.admin.stores import router as stores_router
from app.api.admin.users import router as users_router

admin_router: APIRouter = APIRouter()

admin_router.include_router(users_router, prefix="/users", tags=["Admin Users"])
admin_router.include_router(stores_router, prefix="/stores", tags=["Admin Stores"])
