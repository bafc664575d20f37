"""
Cover image upload service.

Checks the declared content type and the size of an uploaded file, then
hands the bytes to the blob store. The bytes are never decoded.
"""

from fastapi import UploadFile

from postdeck.configs.settings import settings
from postdeck.errors.upload import ImageTooLargeError, UnsupportedImageTypeError
from postdeck.schemas.upload import CoverImageUploadResponse
from postdeck.services.blob_store import BlobStore


class CoverImageService:
    """Accepts cover image uploads for the blob store."""

    def __init__(self, blob_store: BlobStore) -> None:
        self.blob_store = blob_store
        self.max_size_bytes = settings.COVER_IMAGE_MAX_SIZE_MB * 1024 * 1024
        self.allowed_types = settings.COVER_IMAGE_ALLOWED_TYPES

    def validate_content_type(self, content_type: str | None) -> str:
        """
        Validate the content type of the uploaded file.

        Raises:
            UnsupportedImageTypeError: If content type is not allowed
        """
        if not content_type or content_type not in self.allowed_types:
            raise UnsupportedImageTypeError(
                content_type=content_type or "unknown",
                allowed_types=self.allowed_types,
            )
        return content_type

    def validate_file_size(self, file_data: bytes) -> None:
        """
        Validate the size of the uploaded file.

        Raises:
            ImageTooLargeError: If file exceeds maximum size
        """
        actual_size = len(file_data)
        if actual_size > self.max_size_bytes:
            raise ImageTooLargeError(
                max_size_mb=settings.COVER_IMAGE_MAX_SIZE_MB,
                actual_size_mb=actual_size / (1024 * 1024),
            )

    async def read(self, file: UploadFile) -> tuple[bytes, str]:
        """
        Read and validate an uploaded file.

        Returns:
            tuple[bytes, str]: File bytes and content type
        """
        content_type = self.validate_content_type(file.content_type)
        data = await file.read()
        self.validate_file_size(data)
        return data, content_type

    async def upload(self, file: UploadFile) -> CoverImageUploadResponse:
        """
        Store an uploaded cover image.

        Uploading the same bytes again returns the same key.

        Raises:
            UnsupportedImageTypeError: If the content type is not allowed
            ImageTooLargeError: If the file is too large
            UploadFailedError: If the bucket write fails
        """
        data, content_type = await self.read(file)
        key = await self.blob_store.put(data, content_type)
        return CoverImageUploadResponse(key=key, url=self.blob_store.resolve_public_url(key))
