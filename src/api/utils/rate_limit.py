"""
Rate limiting using slowapi.

Keyed by client address. Limits are configured per route:

    @router.post("/sign-in")
    @limiter.limit(ApplicationConfig.RATE_LIMIT_SIGN_IN)
    async def sign_in(request: Request, ...):
        ...
"""

import logging

from fastapi import Request, Response, status
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from config import ApplicationConfig

logger = logging.getLogger(__name__)

# In-memory storage: one process, one window per client
limiter = Limiter(key_func=get_remote_address, enabled=ApplicationConfig.RATE_LIMIT_ENABLED)


def _window_seconds(exc: RateLimitExceeded) -> int:
    try:
        return int(exc.limit.limit.get_expiry())
    except AttributeError:
        return 60


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """429 in the error envelope, with the window length as Retry-After."""
    seconds = _window_seconds(exc)
    minutes = max(seconds // 60, 1)
    logger.warning("Rate limit hit on %s by %s", request.url.path, get_remote_address(request))

    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={
            "error": {
                "code": "RATE_LIMITED",
                "message": f"Too many requests. Please try again after {minutes} minutes",
            }
        },
        headers={"Retry-After": str(seconds)},
    )
