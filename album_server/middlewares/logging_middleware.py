"""
Request logging middleware with Request ID propagation.

미처리 예외는 여기서 로깅하지 않음: 전역 예외 핸들러가 Request ID와 함께 로깅하고
500 응답에 X-Request-ID 헤더를 붙임.
"""
import logging
import time
from typing import Callable, Optional, Tuple

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from album_server.utils.logger import log_error, log_warning, set_request_id

REQUEST_ID_HEADER = "X-Request-ID"

# 느린 응답 기준 (ms)
SLOW_REQUEST_THRESHOLD_MS = 3000

# 헬스체크/문서/메트릭은 로깅 제외 (Request ID도 부여하지 않음)
UNLOGGED_PATHS = frozenset(
    {"/health", "/health/liveness", "/metrics", "/docs", "/redoc", "/openapi.json", "/favicon.ico"}
)


def classify_response(status_code: int, duration_ms: float) -> Optional[Tuple[int, str]]:
    """
    Log level and message for a finished request, or None when it is not logged.

    - 5xx: ERROR
    - 4xx: WARNING
    - slower than SLOW_REQUEST_THRESHOLD_MS: WARNING
    """
    if status_code >= 500:
        return logging.ERROR, "Server error response"
    if status_code >= 400:
        return logging.WARNING, "Client error response"
    if duration_ms >= SLOW_REQUEST_THRESHOLD_MS:
        return logging.WARNING, "Slow request"
    return None


class LoggingMiddleware(BaseHTTPMiddleware):
    """Sets the Request ID for the request context and logs notable responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in UNLOGGED_PATHS:
            return await call_next(request)

        rid = set_request_id(request.headers.get(REQUEST_ID_HEADER))
        started = time.perf_counter()

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        outcome = classify_response(response.status_code, duration_ms)
        if outcome is not None:
            level, message = outcome
            emit = log_error if level >= logging.ERROR else log_warning
            emit(
                message,
                event="request",
                http_method=request.method,
                http_path=request.url.path,
                http_status=response.status_code,
                duration_ms=duration_ms,
                client_ip=request.client.host if request.client else None,
            )

        return response
