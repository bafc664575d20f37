"""Rate limiter configuration using slowapi."""

from hashlib import sha256
from logging import getLogger
from typing import cast

from fastapi import Request
from fastapi.responses import ORJSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.status import HTTP_429_TOO_MANY_REQUESTS

from postdeck.configs import LimiterConfig, file_logger
from postdeck.utils.helpers import strip_bearer

logger = file_logger(getLogger(__name__))


def get_identifier(request: Request) -> str:
    """
    Get unique identifier for rate limiting.

    Uses a digest of the bearer credential when present, otherwise falls
    back to the client IP address.

    Args:
        request: FastAPI request object.

    Returns:
        Unique identifier string.
    """
    token = strip_bearer(request.headers.get("Authorization"))
    if token:
        return f"token:{sha256(token.encode()).hexdigest()[:32]}"

    remote_address = get_remote_address(request)
    return f"ip:{remote_address}"


limiter = Limiter(**LimiterConfig().model_dump(), key_func=get_identifier)


async def rate_limit_exceeded_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle rate limit exceeded exceptions.

    Args:
        request: FastAPI request object.
        exc: RateLimitExceeded exception.

    Returns:
        JSON response in the application's error shape.
    """
    http_exc = cast(RateLimitExceeded, exc)
    response = _rate_limit_exceeded_handler(request, http_exc)
    logger.warning(f"Rate limit exceeded for {get_identifier(request)} on {request.url.path}")
    return ORJSONResponse(
        status_code=HTTP_429_TOO_MANY_REQUESTS,
        content={
            "error": "Rate limit exceeded",
            "allowedRequests": http_exc.detail,
            "retryAfter": f"{response.headers.get('retry-after', '60')} seconds",
        },
    )
