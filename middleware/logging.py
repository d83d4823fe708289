"""
SoYummy Logging Middleware
Structured request/response logging with request ids
"""

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
import structlog
import time
import uuid
from typing import Dict, Any
from contextvars import ContextVar

from utils.request_utils import get_client_ip, get_user_agent

logger = structlog.get_logger()

# Context variable for request tracking
request_id_var: ContextVar[str] = ContextVar('request_id', default='')

SLOW_REQUEST_SECONDS = 2.0


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logging middleware that provides:
    - Request/response logging with unique IDs
    - Slow request warnings
    - Masking of credentials in logged headers
    """

    def __init__(self, app):
        super().__init__(app)

        # Paths to exclude from detailed logging
        self.exclude_paths = {"/api/health", "/favicon.ico"}

        # Sensitive headers to mask in logs
        self.sensitive_headers = {"authorization", "cookie", "x-api-key"}

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        request_id_var.set(request_id)
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        if any(request.url.path.startswith(path) for path in self.exclude_paths):
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response

        request_info = self._extract_request_info(request)
        logger.info("Request started", **request_info, event_type="request_start")

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                **request_info,
                process_time=round(time.time() - start_time, 4),
                error=str(e),
                error_type=type(e).__name__,
                event_type="request_error"
            )
            raise

        process_time = time.time() - start_time
        response_info = self._extract_response_info(response, process_time)

        logger.log(
            self._determine_log_level(response.status_code),
            "Request completed",
            **request_info,
            **response_info,
            event_type="request_complete"
        )

        if process_time > SLOW_REQUEST_SECONDS:
            logger.warning(
                "Slow request detected",
                endpoint=f"{request.method} {request.url.path}",
                response_time=process_time,
                event_type="slow_request"
            )

        response.headers["X-Request-ID"] = request_id
        return response

    def _extract_request_info(self, request: Request) -> Dict[str, Any]:
        return {
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client_ip": get_client_ip(request),
            "user_agent": get_user_agent(request),
            "headers": self._filter_headers(dict(request.headers)),
        }

    def _extract_response_info(self, response: Response, process_time: float) -> Dict[str, Any]:
        return {
            "status_code": response.status_code,
            "process_time": round(process_time, 4),
        }

    def _filter_headers(self, headers: Dict[str, str]) -> Dict[str, str]:
        """Filter sensitive headers from logs"""
        filtered = {}
        for key, value in headers.items():
            if key.lower() in self.sensitive_headers:
                filtered[key] = "***MASKED***"
            else:
                filtered[key] = value
        return filtered

    def _determine_log_level(self, status_code: int) -> int:
        """Determine appropriate log level based on status code"""
        if status_code >= 500:
            return 40  # ERROR
        elif status_code >= 400:
            return 30  # WARNING
        return 20  # INFO


def get_request_id() -> str:
    """Get current request ID from context"""
    return request_id_var.get()
