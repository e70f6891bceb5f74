"""
Global error handling middleware for the application
Provides consistent error responses and logging
"""

from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
import logging
import time
import traceback
from typing import Callable, Dict, List

from ..config import get_settings
from ..exceptions import RecordNotFoundError, ReplyDeskError, ValidationError

logger = logging.getLogger(__name__)

# Endpoints that call the language model
AI_PATH_PREFIXES = ("/api/ask-ai", "/api/summary", "/api/headlines")


def _error_response(status_code: int, error: str, error_type: str, **extra) -> JSONResponse:
    content = {"error": error, "status_code": status_code, "type": error_type}
    content.update({k: v for k, v in extra.items() if v is not None})
    return JSONResponse(status_code=status_code, content=content)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Middleware for handling exceptions globally"""

    async def dispatch(self, request: Request, call_next: Callable):
        """Process requests and handle exceptions"""
        try:
            response = await call_next(request)
            return response

        except HTTPException as exc:
            logger.warning(f"HTTP Exception: {exc.status_code} - {exc.detail}")
            return _error_response(exc.status_code, exc.detail, "http_error")

        except RecordNotFoundError as exc:
            logger.warning(str(exc))
            return _error_response(404, str(exc), "not_found", code=exc.error_code)

        except (ValueError, ValidationError) as exc:
            logger.error(f"Validation error: {str(exc)}")
            return _error_response(400, str(exc), "validation_error")

        except ConnectionError as exc:
            # DB or upstream API unreachable
            logger.error(f"Connection error: {str(exc)}")
            return _error_response(
                503,
                "Service temporarily unavailable",
                "connection_error",
                detail=str(exc) if request.url.path.startswith("/api/") else None,
            )

        except ReplyDeskError as exc:
            logger.error(f"{exc.error_code}: {str(exc)}")
            return _error_response(500, str(exc), "application_error", code=exc.error_code)

        except Exception as exc:
            logger.error(f"Unhandled exception: {str(exc)}\n{traceback.format_exc()}")

            # Don't expose internal errors in production
            error_message = "An unexpected error occurred"
            if request.url.path.startswith("/api/") and request.app.debug:
                error_message = str(exc)

            return _error_response(500, error_message, "internal_error")


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding window rate limit for the writing assistant, keyed by client IP"""

    def __init__(
        self,
        app,
        max_requests: int = 50,
        window_seconds: int = 24 * 60 * 60,
        path_prefix: str = "/api/ask-ai",
    ):
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.path_prefix = path_prefix
        self.request_counts: Dict[str, List[float]] = {}  # in-memory, per process

    def _client_id(self, request: Request) -> str:
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()
        return request.client.host if request.client else "unknown"

    async def dispatch(self, request: Request, call_next: Callable):
        if request.method != "POST" or not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        client_id = self._client_id(request)
        current_time = time.time()

        # Remove old requests outside the window
        timestamps = [
            ts
            for ts in self.request_counts.get(client_id, [])
            if current_time - ts < self.window_seconds
        ]
        self.request_counts[client_id] = timestamps

        reset_at = int((timestamps[0] if timestamps else current_time) + self.window_seconds)
        headers = {
            "X-RateLimit-Limit": str(self.max_requests),
            "X-RateLimit-Reset": str(reset_at),
        }

        if len(timestamps) >= self.max_requests:
            logger.warning(f"Rate limit exceeded for client: {client_id}")
            headers["X-RateLimit-Remaining"] = "0"
            return JSONResponse(
                status_code=429,
                content={
                    "error": "You have reached your request limit for the day.",
                    "status_code": 429,
                    "type": "rate_limit_error",
                    "retry_after": reset_at - int(current_time),
                },
                headers=headers,
            )

        response = await call_next(request)
        # Rejected requests do not use up the allowance
        if response.status_code < 400:
            timestamps.append(current_time)
        response.headers.update(headers)
        response.headers["X-RateLimit-Remaining"] = str(self.max_requests - len(timestamps))
        return response


class APIKeyValidationMiddleware(BaseHTTPMiddleware):
    """Middleware to validate API keys are configured"""

    async def dispatch(self, request: Request, call_next: Callable):
        """Check if API keys are configured for AI endpoints"""
        if request.method != "POST" or not request.url.path.startswith(AI_PATH_PREFIXES):
            return await call_next(request)

        if not get_settings().generation_is_configured:
            logger.error("No AI API keys configured")
            return _error_response(
                503,
                "AI service not configured. Please contact administrator.",
                "configuration_error",
            )

        return await call_next(request)
