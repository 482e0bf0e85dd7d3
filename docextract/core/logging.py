from __future__ import annotations

import logging
import sys
import time
import uuid
from typing import Any, Awaitable, Callable, Optional

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp
from structlog.types import EventDict, Processor

__all__: list[str] = [
    "configure_logging",
    "RequestLoggingMiddleware",
]

REQUEST_ID_HEADER = "X-Request-ID"

ErrorHandler = Callable[[Request, Exception], Awaitable[Response]]


def _ensure_request_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    # Lines logged outside a request still carry both keys.
    event_dict.setdefault("request_id", None)
    event_dict.setdefault("path", None)
    return event_dict


_JSON_PROCESSORS: list[Processor] = [
    structlog.contextvars.merge_contextvars,
    _ensure_request_context,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.format_exc_info,
    structlog.processors.JSONRenderer(),
]

_LOGGING_CONFIGURED: bool = False


def _configure_stdlib_logging(level: int) -> None:
    """Send uvicorn/starlette records to stderr, one handler only."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)


def configure_logging(debug: bool = False) -> None:
    """Set up JSON structlog output once per process; later calls do nothing."""
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        return

    level: int = logging.DEBUG if debug else logging.INFO
    _configure_stdlib_logging(level)
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        processors=_JSON_PROCESSORS,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _LOGGING_CONFIGURED = True


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Bind ``request_id``/``path``/``method`` for the request and log its outcome.

    When ``error_handler`` is given, exceptions escaping the app are rendered
    here, while the request context is still bound, so the 500 response also
    carries ``X-Request-ID``.
    """

    def __init__(
        self, app: ASGIApp, error_handler: Optional[ErrorHandler] = None
    ) -> None:
        super().__init__(app)
        self._error_handler = error_handler

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        start: float = time.perf_counter()
        request_id: str = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=request.url.path,
            method=request.method,
        )

        status_code: int = 500
        try:
            try:
                response: Response = await call_next(request)
            except Exception as exc:
                if self._error_handler is None:
                    raise
                response = await self._error_handler(request, exc)
            status_code = response.status_code
        finally:
            structlog.get_logger("http").info(
                "request_completed",
                status_code=status_code,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
            structlog.contextvars.clear_contextvars()

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
