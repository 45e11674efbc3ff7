"""전역 예외 핸들러 — 요청 검증 오류와 미처리 예외 응답 형식.

Global exception handlers.
    - RequestValidationError → 400 with per-field messages
    - Exception (catch-all) → 500 without internal details

HTTPException subclasses from app.utils.exceptions are rendered by FastAPI's
default handler as {"detail": "..."} with their own status code.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """FastAPI 앱에 전역 예외 핸들러를 등록합니다.

    Register all global error handlers on the FastAPI app.
    """

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ) -> JSONResponse:
        logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=build_validation_error_response(exc),
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )


def build_validation_error_response(exc: RequestValidationError) -> dict:
    """검증 오류를 필드별 메시지 딕셔너리로 변환합니다.

    Group validation messages by field name, e.g.
    {"detail": "Validation failed", "errors": {"swiftCode": ["..."]}}.
    """
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        loc: tuple = tuple(error.get("loc", ()))
        # ("body", "swiftCode") → "swiftCode", ("path", "swift_code") → "swift_code"
        field: str = str(loc[-1]) if len(loc) > 1 else (str(loc[0]) if loc else "request")
        message: str = str(error.get("msg", "Invalid value"))
        # pydantic은 ValueError 메시지 앞에 "Value error, "를 붙임
        message = message.removeprefix("Value error, ")
        errors.setdefault(field, []).append(message)
    return {"detail": "Validation failed", "errors": errors}
