"""v1 API 라우터 패키지 — 모든 v1 엔드포인트 통합.

v1 API Router package — Aggregates all version 1 endpoints into a single
router for inclusion in the FastAPI application under /api/v1.

Included routers:
    - swift_codes: SWIFT 코드 조회/생성/삭제 (SWIFT code lookup, creation, deletion)
"""

from fastapi import APIRouter

from app.api.v1.swift_codes import router as swift_codes_router

v1_router: APIRouter = APIRouter()

v1_router.include_router(swift_codes_router, prefix="/swift-codes", tags=["SWIFT Codes"])
