"""Input validation and referential errors."""

from logging import getLogger
from typing import Any, cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_400_BAD_REQUEST

from postdeck.configs import file_logger
from postdeck.errors.base import BaseAppError, create_exception_handler
from postdeck.utils.helpers import host

logger = file_logger(getLogger(__name__))


class ValidationError(BaseAppError):
    """Raised for empty or malformed input."""

    def __init__(
        self,
        detail: str = "Validation Error",
        field: str | None = None,
    ) -> None:
        super().__init__(detail=detail, status_code=HTTP_400_BAD_REQUEST)
        self.field = field

    @property
    def extra(self) -> dict[str, Any]:
        return {"field": self.field} if self.field else {}


class DanglingReferenceError(BaseAppError):
    """Raised when a post references category ids that do not exist."""

    def __init__(self, missing_ids: list[str]) -> None:
        self.missing_ids = sorted(missing_ids)
        detail = f"Categories not found: {', '.join(self.missing_ids)}"
        super().__init__(detail=detail, status_code=HTTP_400_BAD_REQUEST)

    @property
    def extra(self) -> dict[str, Any]:
        return {"missingIds": self.missing_ids}


async def request_validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Map FastAPI request validation errors to the 400 error shape.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse with formatted validation errors.
    """
    exec_error = cast(RequestValidationError, exc)

    formatted_errors = [
        {
            # Skip the 'body' / 'query' prefix
            "field": ".".join(str(loc) for loc in error.get("loc", [])[1:]),
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type", "validation_error"),
        }
        for error in exec_error.errors()
    ]

    logger.warning(
        f"Validation error for ip: {host(request)} at endpoint {request.url.path}: {formatted_errors}",
    )

    return ORJSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={"error": "Validation failed", "errors": formatted_errors},
    )


validation_exception_handler = create_exception_handler(logger)
