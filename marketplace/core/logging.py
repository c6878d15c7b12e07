"""
Logging setup and per-request access log.
Each request gets an id (echoed in X-Request-Id) so server-side errors can be matched to responses.
"""

import logging
import time
import uuid

from fastapi import Request

from marketplace.core.exceptions import unhandled_exception_handler

logger = logging.getLogger("marketplace.access")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once. Safe to call repeatedly (e.g. create_app in tests)."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger("marketplace").setLevel(level.upper())


async def request_id_middleware(request: Request, call_next):
    request.state.request_id = request.headers.get("X-Request-Id") or uuid.uuid4().hex
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception as exc:
        # Answer here so the 500 still carries the request id and gets an access-log line
        response = await unhandled_exception_handler(request, exc)
    elapsed_ms = (time.perf_counter() - started) * 1000
    response.headers["X-Request-Id"] = request.state.request_id
    logger.info(
        "%s %s -> %s (%.1f ms) request_id=%s",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
        request.state.request_id,
    )
    return response
