"""Request latency logging middleware."""

import logging
import time
from typing import Callable

from fastapi import Request, Response

from src.core.config import get_settings

logger = logging.getLogger(__name__)

HEALTH_PATHS = frozenset({"/health", "/health/ready"})


def _log_level(status_code: int, latency_ms: float, failed: bool) -> int:
    settings = get_settings()
    if failed or status_code >= 500 or latency_ms > settings.very_slow_request_threshold_ms:
        return logging.ERROR
    if status_code >= 400 or latency_ms > settings.slow_request_threshold_ms:
        return logging.WARNING
    return logging.INFO


async def latency_logging_middleware(request: Request, call_next: Callable) -> Response:
    """Log method, path, status and latency for every request.

    Health checks are logged at debug level only. Slow requests and
    error statuses are raised to warning or error.

    Args:
        request: The incoming request.
        call_next: The next middleware/handler in the chain.

    Returns:
        Response: The response from the handler.
    """
    start_time = time.perf_counter()
    response = None
    failed = False

    try:
        response = await call_next(request)
        return response
    except Exception:
        failed = True
        raise
    finally:
        latency_ms = (time.perf_counter() - start_time) * 1000
        status_code = response.status_code if response else 500
        log_msg = "%s %s - %d - %.2fms"
        args = (request.method, request.url.path, status_code, latency_ms)

        if request.url.path in HEALTH_PATHS:
            logger.debug(log_msg, *args)
        else:
            logger.log(_log_level(status_code, latency_ms, failed), log_msg, *args)
