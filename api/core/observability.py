"""
Logging setup and the per-request access log.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable

from fastapi import Request, Response

logger = logging.getLogger("api.requests")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_configured = False


def setup_logging(level: str = "INFO") -> None:
    global _configured
    # create_app may run more than once per process (tests); install one handler only.
    if _configured:
        return None
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    _configured = True


async def log_requests(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    target = request.url.path
    if request.url.query:
        target = f"{target}?{request.url.query}"
    logger.info("[%s] %s %s", datetime.now(timezone.utc).isoformat(), request.method, target)
    return await call_next(request)
