"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어, 예외 핸들러 및 라우터 등록.

FastAPI application entry point — Middleware, error handler and router registration.
Configures logging, Axiom request logging, CORS, health check and the v1 API.

Usage:
    uvicorn app.main:app --port 8080
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.v1 import v1_router
from app.config import settings
from app.middleware.axiom_logging import AxiomLoggingMiddleware
from app.utils.logging_config import setup_logging

setup_logging()

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    description="API for managing and retrieving SWIFT/BIC code information.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Axiom API 로깅 미들웨어 — Axiom API request/response logging
# CORS보다 먼저 등록하여 모든 요청을 캡처 (Registered before CORS to capture all requests)
app.add_middleware(AxiomLoggingMiddleware)

# CORS 미들웨어 — Cross-Origin Resource Sharing middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


app.include_router(v1_router, prefix="/api/v1")
