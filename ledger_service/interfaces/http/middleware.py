"""Request logging middleware."""

from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request

logger = logging.getLogger(__name__)


async def log_requests(request: Request, call_next):
    start_time = time.perf_counter()
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    try:
        response = await call_next(request)
    except Exception as exc:
        logger.error(
            "Request %s %s %s failed after %.3fs: %s",
            request_id,
            request.method,
            request.url.path,
            time.perf_counter() - start_time,
            exc,
        )
        raise

    logger.info(
        "Request %s %s %s -> %s in %.3fs",
        request_id,
        request.method,
        request.url.path,
        response.status_code,
        time.perf_counter() - start_time,
    )
    response.headers["X-Request-ID"] = request_id
    return response


__all__ = ["log_requests"]
