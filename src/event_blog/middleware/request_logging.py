"""
Request logging middleware.

Logs one line per request with method, path, status and duration, on the `[REQUEST]`
logger. Requests that raise are logged with the failure and re-raised.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from event_blog.managers.logging_manager import get_logger

logger = get_logger(prefix="[REQUEST]")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "%s %s failed after %.3fs: %s", request.method, request.url.path, time.time() - start_time, e
            )
            raise

        logger.info(
            "%s %s -> %d in %.3fs",
            request.method,
            request.url.path,
            response.status_code,
            time.time() - start_time,
        )
        return response
