"""Access logging for the /api/ routes."""

from __future__ import annotations

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from intent_bot.logging import get_logger

logger = get_logger(__name__)


class AccessLogMiddleware(BaseHTTPMiddleware):
    """One line per request: ``METHOD url status length - ms``."""

    def __init__(self, app, path_prefix: str = "/api/"):
        super().__init__(app)
        self.path_prefix = path_prefix

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"
        length = response.headers.get("content-length", "-")
        logger.info(
            f"{request.method} {target} {response.status_code} {length} - {duration_ms:.3f} ms"
        )
        return response
