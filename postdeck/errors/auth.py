"""Authentication and authorization errors."""

from logging import getLogger

from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from postdeck.configs import file_logger
from postdeck.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class UnauthenticatedError(BaseAppError):
    """Raised when a credential is missing, malformed or rejected upstream."""

    def __init__(self, detail: str = "Authentication failed") -> None:
        super().__init__(detail, HTTP_401_UNAUTHORIZED)

    @property
    def headers(self) -> dict[str, str]:
        return {"WWW-Authenticate": "Bearer"}


class ForbiddenError(BaseAppError):
    """Raised when an authenticated identity lacks administrator privilege."""

    def __init__(self, detail: str = "Administrator privilege required") -> None:
        super().__init__(detail, HTTP_403_FORBIDDEN)


auth_exception_handler = create_exception_handler(logger)
