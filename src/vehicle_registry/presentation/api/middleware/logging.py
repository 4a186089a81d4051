"""Access logging for the vehicle registry API."""

import time
import logging
from typing import Callable, Iterable, Mapping, Optional
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ....infrastructure.logging import correlation_scope, get_logger, log_with_extra

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"

# Header values that carry credentials are replaced before logging
REDACTED_HEADERS = frozenset({
    'authorization',
    'proxy-authorization',
    'cookie',
    'set-cookie',
    'www-authenticate',
})

DEFAULT_EXCLUDED_PATHS = frozenset({
    '/health',
    '/docs',
    '/redoc',
    '/openapi.json',
    '/favicon.ico',
})


def redact_headers(headers: Mapping[str, str]) -> dict:
    """Copy of ``headers`` with credential values hidden."""
    return {
        key: "[REDACTED]" if key.lower() in REDACTED_HEADERS else value
        for key, value in headers.items()
    }


def _status_level(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestResponseLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log one line per request and one per response.

    The caller's ``X-Correlation-ID`` is reused when present, otherwise a new
    id is generated; either way it is bound to every log record written while
    the request is served and echoed on the response. Request bodies are
    never logged since login bodies carry passwords.
    """

    def __init__(self, app: ASGIApp, exclude_paths: Optional[Iterable[str]] = None):
        super().__init__(app)
        self.exclude_paths = frozenset(exclude_paths) if exclude_paths is not None else DEFAULT_EXCLUDED_PATHS

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in self.exclude_paths:
            return await call_next(request)

        with correlation_scope(request.headers.get(CORRELATION_HEADER)) as correlation_id:
            started = time.perf_counter()
            log_with_extra(
                logger,
                logging.INFO,
                f"{request.method} {request.url.path}",
                request_method=request.method,
                request_path=request.url.path,
                request_query=str(request.query_params) or None,
                request_headers=redact_headers(request.headers),
                client_host=request.client.host if request.client else None,
            )

            try:
                response = await call_next(request)
            except Exception as exc:
                logger.error(
                    f"{request.method} {request.url.path} raised {type(exc).__name__}",
                    extra={
                        "request_method": request.method,
                        "request_path": request.url.path,
                        "duration_ms": self._elapsed_ms(started),
                    },
                    exc_info=True
                )
                raise

            response.headers[CORRELATION_HEADER] = correlation_id
            log_with_extra(
                logger,
                _status_level(response.status_code),
                f"{request.method} {request.url.path} -> {response.status_code}",
                request_method=request.method,
                request_path=request.url.path,
                response_status=response.status_code,
                duration_ms=self._elapsed_ms(started),
            )
            return response

    @staticmethod
    def _elapsed_ms(started: float) -> float:
        return round((time.perf_counter() - started) * 1000, 2)
