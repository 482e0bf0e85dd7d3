from __future__ import annotations

from http import HTTPStatus
from typing import Any, Dict, Type

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from docextract.core.exceptions import (
    DocumentExtractionError,
    NoFileError,
    SizeLimitExceededError,
    UnsupportedContentTypeError,
)

__all__: list[str] = ["add_exception_handlers", "unhandled_exception_handler"]

logger = structlog.get_logger("errors")

# Boundary rejections: the request itself is refused, no extraction ran.
_REJECTION_STATUS: Dict[Type[DocumentExtractionError], int] = {
    NoFileError: status.HTTP_400_BAD_REQUEST,
    SizeLimitExceededError: status.HTTP_400_BAD_REQUEST,
    UnsupportedContentTypeError: status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
}


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None) or request.headers.get(
        "x-request-id"
    )


def _build_error_payload(
    message: str,
    code: str | int,
    request_id: str | None = None,
    extra: Dict[str, Any] | None = None,
) -> Dict[str, Any]:
    """Return a JSON-serialisable error envelope.

    Parameters
    ----------
    message:
        Human-readable description; always a plain string under ``error``.
    code:
        A machine-readable error code (snake_case) or HTTP status integer.
    request_id:
        Correlation ID bound by `RequestLoggingMiddleware`.
    extra:
        Optional additional payload (``details`` for extraction failures).
    """

    payload: Dict[str, Any] = {
        "error": message,
        "code": code,
        "request_id": request_id,
    }
    if extra:
        payload.update(extra)
    return payload


def _error_code(exc: Exception) -> str:
    """``UpstreamParseError`` → ``upstream_parse_error``."""
    name = type(exc).__name__
    return "".join(
        f"_{char.lower()}" if char.isupper() and index else char.lower()
        for index, char in enumerate(name)
    )


async def _extraction_error_handler(
    request: Request,
    exc: DocumentExtractionError,
) -> JSONResponse:
    """Turn a pipeline or boundary error into a single top-level response."""

    for exc_type, status_code in _REJECTION_STATUS.items():
        if isinstance(exc, exc_type):
            logger.warning(
                "upload_rejected",
                path=request.url.path,
                status_code=status_code,
                error=str(exc),
            )
            payload = _build_error_payload(
                message=str(exc),
                code=_error_code(exc),
                request_id=_request_id(request),
            )
            return JSONResponse(status_code=status_code, content=payload)

    logger.error(
        "extraction_failed",
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    payload = _build_error_payload(
        message="Error processing file",
        code=_error_code(exc),
        request_id=_request_id(request),
        extra={"details": str(exc)},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload
    )


async def _http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Handle exceptions explicitly raised by the application/routers."""

    logger.warning(
        "http_exception",
        path=request.url.path,
        status_code=exc.status_code,
        detail=str(exc.detail),
    )

    payload = _build_error_payload(
        message=str(exc.detail),
        code=exc.status_code,
        request_id=_request_id(request),
    )
    return JSONResponse(status_code=exc.status_code, content=payload)


async def _validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Handle body/query/path parameter validation failures (422)."""

    logger.warning(
        "validation_error",
        path=request.url.path,
        errors=jsonable_encoder(exc.errors()),
    )

    payload = _build_error_payload(
        message="Invalid request parameters.",
        code="validation_error",
        request_id=_request_id(request),
        extra={"details": jsonable_encoder(exc.errors())},
    )
    return JSONResponse(
        status_code=HTTPStatus.UNPROCESSABLE_ENTITY, content=payload
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:  # noqa: D401 – FastAPI handler sig
    """Catch-all for unexpected errors – returns HTTP 500."""

    logger.exception(
        "unhandled_exception",
        path=request.url.path,
        error=str(exc),
    )

    payload = _build_error_payload(
        message="An unexpected error occurred.",
        code="internal_server_error",
        request_id=_request_id(request),
    )
    return JSONResponse(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,  # 500
        content=payload,
    )


def add_exception_handlers(app: FastAPI) -> None:  # noqa: D401 – imperative
    """Register all global exception handlers on **app**."""

    app.add_exception_handler(DocumentExtractionError, _extraction_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
