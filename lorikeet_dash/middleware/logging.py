"""
Logging middleware for the dashboard server.

Logs every request and response with its timing.
"""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for request/response logging.

    Chart images are polled by every open dashboard, so their lines are
    logged at DEBUG unless ``log_chart_requests`` is set.
    """

    def __init__(self, app, log_chart_requests: bool = False):
        """
        Initialize the logging middleware.

        Args:
            app: FastAPI application instance
            log_chart_requests: Whether to log chart requests at INFO
        """
        super().__init__(app)
        self.log_chart_requests = log_chart_requests

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        client_ip = request.client.host if request.client else None
        log = self._log_for(request)

        log(f"📥 {request.method} {request.url.path} - {client_ip}")

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"💥 {request.method} {request.url.path} - ERROR - {process_time:.3f}s - {str(e)}"
            )
            # Re-raise the exception for error handling middleware
            raise

        process_time = time.time() - start_time
        log(
            f"📤 {request.method} {request.url.path} - {response.status_code} - "
            f"{process_time:.3f}s"
        )
        response.headers["X-Process-Time"] = f"{process_time:.6f}"
        return response

    def _log_for(self, request: Request) -> Callable[[str], None]:
        if not self.log_chart_requests and request.url.path.startswith("/charts/"):
            return logger.debug
        return logger.info
