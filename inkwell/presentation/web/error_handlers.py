"""전역 예외 핸들러.

- DomainError → 예외가 가진 http_status + {"error": {"code", "message"}}
- HTTPException (401, 413, 라우트 없음 등) → 같은 응답 형태, 헤더 유지
- RequestValidationError → 400 + 필드별 상세
- 그 외 Exception → 500, 내부 정보는 노출하지 않음
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from inkwell.domain.exceptions import DomainError, PersistenceError

logger = logging.getLogger(__name__)

_HTTP_ERROR_CODES = {
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
    status.HTTP_413_REQUEST_ENTITY_TOO_LARGE: "PAYLOAD_TOO_LARGE",
}


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        if isinstance(exc, PersistenceError):
            logger.error(f"{request.method} {request.url.path}: {exc.message}", exc_info=exc)
        else:
            logger.info(f"{request.method} {request.url.path} → {exc.http_status} {exc.code}: {exc.message}")
        return JSONResponse(
            status_code=exc.http_status,
            content={"error": {"code": exc.code, "message": exc.message}},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        code = _HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
        logger.info(f"{request.method} {request.url.path} → {exc.status_code} {code}: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": {"code": code, "message": str(exc.detail)}},
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"요청 검증 실패 {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": {
                    "code": "VALIDATION_ERROR",
                    "message": "Request validation failed",
                    "details": [
                        {"field": ".".join(str(p) for p in err.get("loc", [])), "message": err.get("msg")}
                        for err in exc.errors()
                    ],
                }
            },
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(f"처리되지 않은 예외 {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": {"code": "INTERNAL_ERROR", "message": "An unexpected error occurred"}},
        )
