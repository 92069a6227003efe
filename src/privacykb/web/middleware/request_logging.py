"""Structured request logging middleware for FastAPI."""

import logging
import time
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

# Get logger - will be wrapped by structlog
logger = logging.getLogger(__name__)


class StructuredRequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log HTTP requests in structured format."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Log request details in structured format."""
        start_time = time.time()

        response = await call_next(request)

        duration_ms = (time.time() - start_time) * 1000

        extra_fields = {
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round(duration_ms, 2),
        }

        # The action is the interesting part of a knowledge base request
        if action := request.query_params.get("action"):
            extra_fields["action"] = action
        if languages := getattr(request.state, "languages", None):
            extra_fields["languages"] = ",".join(languages)
        if request.client:
            extra_fields["client_host"] = request.client.host

        logger.info(
            f"{request.method} {request.url.path} {response.status_code}", extra=extra_fields
        )

        return response
