"""
Error handling middleware for the dashboard server.

Catches anything a route did not handle, logs it and returns a consistent
JSON error response.
"""

import logging
import traceback
from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from lorikeet_dash.schemas import ErrorResponse

logger = logging.getLogger(__name__)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for centralized error handling.
    """

    def __init__(self, app, enable_error_logging: bool = True):
        """
        Initialize the error handling middleware.

        Args:
            app: FastAPI application instance
            enable_error_logging: Whether to log full tracebacks
        """
        super().__init__(app)
        self.enable_error_logging = enable_error_logging

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except StarletteHTTPException as e:
            return self._handle_http_exception(request, e)
        except Exception as e:
            return self._handle_unexpected_exception(request, e)

    def _handle_http_exception(self, request: Request, exc: StarletteHTTPException) -> JSONResponse:
        logger.warning(
            f"🚨 HTTP {exc.status_code} error for {request.method} {request.url.path}: {exc.detail}"
        )

        error_response = ErrorResponse(
            error=str(exc.detail),
            error_code=f"HTTP_{exc.status_code}",
            details={
                "path": str(request.url.path),
                "method": request.method,
                "status_code": exc.status_code,
            },
        )
        return JSONResponse(status_code=exc.status_code, content=error_response.model_dump(mode="json"))

    def _handle_unexpected_exception(self, request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            f"💥 Unexpected error for {request.method} {request.url.path}: {str(exc)}"
        )
        if self.enable_error_logging:
            logger.error(f"📋 Full traceback:\n{traceback.format_exc()}")

        error_response = ErrorResponse(
            error="Internal server error",
            error_code="INTERNAL_ERROR",
            details={
                "path": str(request.url.path),
                "method": request.method,
                "error_type": type(exc).__name__,
            },
        )
        return JSONResponse(status_code=500, content=error_response.model_dump(mode="json"))
