from logging import getLogger

from starlette.status import HTTP_404_NOT_FOUND

from postdeck.configs import file_logger
from postdeck.errors.base import BaseAppError, create_exception_handler
from postdeck.errors.upload import StorageError

logger = file_logger(getLogger(__name__))


class DatabaseError(StorageError):
    """Base exception for database errors."""

    def __init__(self, detail: str = "Database Error") -> None:
        super().__init__(detail)


class NotFoundError(BaseAppError):
    """Exception raised when a post or category id does not exist."""

    def __init__(self, resource: str = "Record", record_id: object = None) -> None:
        detail = f"{resource} not found"
        if record_id is not None:
            detail = f"{resource} with ID {record_id} not found"
        super().__init__(detail, HTTP_404_NOT_FOUND)
        self.resource = resource


database_exception_handler = create_exception_handler(logger)
