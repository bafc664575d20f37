from postdeck.errors.auth import ForbiddenError, UnauthenticatedError, auth_exception_handler
from postdeck.errors.base import BaseAppError, create_exception_handler, create_unexpected_handler
from postdeck.errors.database import (
    DatabaseError,
    NotFoundError,
    database_exception_handler,
)
from postdeck.errors.upload import (
    ImageTooLargeError,
    StorageError,
    UnsupportedImageTypeError,
    UploadFailedError,
    upload_exception_handler,
)
from postdeck.errors.validation import (
    DanglingReferenceError,
    ValidationError,
    request_validation_exception_handler,
    validation_exception_handler,
)

__all__ = [
    "BaseAppError",
    "DanglingReferenceError",
    "DatabaseError",
    "ForbiddenError",
    "ImageTooLargeError",
    "NotFoundError",
    "StorageError",
    "UnauthenticatedError",
    "UnsupportedImageTypeError",
    "UploadFailedError",
    "ValidationError",
    "auth_exception_handler",
    "create_exception_handler",
    "create_unexpected_handler",
    "database_exception_handler",
    "request_validation_exception_handler",
    "upload_exception_handler",
    "validation_exception_handler",
]
