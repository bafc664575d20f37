from collections.abc import Awaitable, Callable
from logging import Logger
from typing import Any

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from postdeck.configs import DEFAULT_ERROR_MESSAGE
from postdeck.utils.helpers import host


class BaseAppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        detail: str = DEFAULT_ERROR_MESSAGE,
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code

    def __str__(self) -> str:
        return self.detail

    @property
    def extra(self) -> dict[str, Any]:
        """Additional context fields to include in the error payload."""
        return {}

    @property
    def headers(self) -> dict[str, str] | None:
        return None


def create_exception_handler(
    logger: Logger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a standardized exception handler for the application.

    The response body is ``{"error": detail}`` plus any extra context the
    exception carries.

    Args:
        logger: Logger instance to use for logging exceptions.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        status_code = HTTP_500_INTERNAL_SERVER_ERROR
        detail = DEFAULT_ERROR_MESSAGE
        content: dict[str, Any] = {}
        headers = None

        if isinstance(exc, BaseAppError):
            status_code = exc.status_code
            detail = exc.detail
            content.update(exc.extra)
            headers = exc.headers

        logger.warning(
            f"{status_code} {detail} for ip: {host(request)} for endpoint {request.url.path}",
        )

        return ORJSONResponse(
            content={"error": detail, **content},
            status_code=status_code,
            headers=headers,
        )

    return handler


def create_unexpected_handler(
    logger: Logger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create the catch-all handler for exceptions outside the application taxonomy.

    The full traceback is logged server side; the caller only sees a
    generic message.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        logger.error(
            f"Unexpected error for ip: {host(request)} for endpoint {request.url.path}",
            exc_info=exc,
        )
        return ORJSONResponse(
            content={"error": DEFAULT_ERROR_MESSAGE},
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return handler
