"""Exception handlers producing the compare API error bodies."""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from backend.carcompare.core.exceptions import CompareError
from backend.carcompare.core.logging import get_logger

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Interner Fehler"


def build_error_response(status_code: int, message: str, details: str | None = None) -> JSONResponse:
    content = {"error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


async def compare_exception_handler(request: Request, exc: CompareError) -> JSONResponse:
    if exc.status_code < status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.warning(
            f"Rejected request: {exc.message}",
            extra={"path": request.url.path, "error_type": type(exc).__name__},
        )
        return build_error_response(exc.status_code, exc.message)

    logger.error(
        f"Compare failed: {exc.message}",
        extra={"path": request.url.path, "error_type": type(exc).__name__},
        exc_info=exc,
    )
    return build_error_response(exc.status_code, INTERNAL_ERROR_MESSAGE, details=exc.message)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception: {type(exc).__name__}: {exc}",
        extra={"path": request.url.path, "method": request.method},
        exc_info=exc,
    )
    return build_error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE, details=str(exc))


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CompareError, compare_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
