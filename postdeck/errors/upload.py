"""
Storage and upload error classes.

This module defines the storage failure kind shared by the blob bucket
and the database, and the upload errors raised while accepting a cover
image.
"""

from typing import Any

from starlette.status import (
    HTTP_413_REQUEST_ENTITY_TOO_LARGE,
    HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from postdeck.errors.base import BaseAppError, create_exception_handler
from postdeck.monitoring import get_logger

logger = get_logger(__name__)


class StorageError(BaseAppError):
    """Base exception for bucket or database I/O failures."""

    def __init__(
        self,
        detail: str = "Storage operation failed",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail=detail, status_code=status_code)


class UploadFailedError(StorageError):
    """Exception raised when the blob bucket rejects or fails a write."""

    def __init__(self, diagnostic: str, key: str | None = None) -> None:
        super().__init__(detail=f"Upload failed: {diagnostic}")
        self.diagnostic = diagnostic
        self.key = key

    @property
    def extra(self) -> dict[str, Any]:
        return {"key": self.key} if self.key else {}


class ImageTooLargeError(BaseAppError):
    """Exception raised when an uploaded cover image exceeds the size limit."""

    def __init__(
        self,
        max_size_mb: int = 5,
        actual_size_mb: float | None = None,
    ) -> None:
        detail = f"Cover image is too large. Maximum size is {max_size_mb}MB."
        if actual_size_mb is not None:
            detail += f" Your file is {actual_size_mb:.1f}MB."
        super().__init__(detail=detail, status_code=HTTP_413_REQUEST_ENTITY_TOO_LARGE)
        self.max_size_mb = max_size_mb
        self.actual_size_mb = actual_size_mb


class UnsupportedImageTypeError(BaseAppError):
    """Exception raised when an uploaded cover image type is not allowed."""

    def __init__(
        self,
        content_type: str,
        allowed_types: list[str] | None = None,
    ) -> None:
        self.content_type = content_type
        self.allowed_types = allowed_types or []
        detail = f"Unsupported cover image type '{content_type}'."
        super().__init__(detail=detail, status_code=HTTP_415_UNSUPPORTED_MEDIA_TYPE)

    @property
    def extra(self) -> dict[str, Any]:
        return {"allowedTypes": self.allowed_types}


upload_exception_handler = create_exception_handler(logger)
