"""
Logging Middleware - Request/Response logging
"""
import time
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from typing import Callable
from dokuweb_gateway.utils.logger import get_logger

logger = get_logger(__name__)

QUIET_PATHS = ("/api/health",)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Log one line per request and one per response

    Adds an X-Process-Time header (milliseconds) to every logged response.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.time()
        method = request.method
        path = request.url.path
        client_host = request.client.host if request.client else "unknown"

        logger.info(f"→ {method} {path} from {client_host}")

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = int((time.time() - start_time) * 1000)
            logger.error(
                f"✗ {method} {path} ERROR ({duration_ms}ms): {str(e)}",
                exc_info=True
            )
            raise

        duration_ms = int((time.time() - start_time) * 1000)
        logger.info(f"← {method} {path} {response.status_code} ({duration_ms}ms)")
        response.headers["X-Process-Time"] = str(duration_ms)
        return response
