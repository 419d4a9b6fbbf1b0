"""Request logging middleware that tags simulation logs with a request id."""

import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from collector.core.logging_config import get_logger, request_id_var

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Binds a request id for the duration of each request and logs the outcome.

    A caller-supplied ``X-Request-ID`` is reused so a client can correlate
    its own logs with the calculator and simulator records of that request.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        token = request_id_var.set(request_id)
        try:
            return await self._timed(request, call_next, request_id)
        finally:
            request_id_var.reset(token)

    async def _timed(self, request: Request, call_next: Callable, request_id: str) -> Response:
        route = f"{request.method} {request.url.path}"
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"Request failed: {route}",
                extra={"extra_data": {"duration_ms": _elapsed_ms(start_time), "error": str(e)}},
                exc_info=True,
            )
            raise

        log = logger.warning if response.status_code >= 400 else logger.info
        log(
            f"{route} -> {response.status_code}",
            extra={
                "extra_data": {
                    "status_code": response.status_code,
                    "duration_ms": _elapsed_ms(start_time),
                }
            },
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def _elapsed_ms(start_time: float) -> float:
    return round((time.perf_counter() - start_time) * 1000, 2)
