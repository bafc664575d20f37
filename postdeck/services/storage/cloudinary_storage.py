"""
Cloudinary bucket implementation.

The blob key is used verbatim as the Cloudinary public id, so identical
content maps to the same asset.
"""

import asyncio
from functools import partial

import cloudinary
import cloudinary.api
import cloudinary.exceptions
import cloudinary.uploader
import cloudinary.utils

from postdeck.configs.settings import settings
from postdeck.services.storage.base import BucketError


class CloudinaryBucket:
    """Bucket backed by Cloudinary with CDN delivery."""

    def __init__(self, folder: str | None = None) -> None:
        """Initialize Cloudinary with configured credentials."""
        cloudinary.config(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET.get_secret_value(),
            secure=True,
        )
        self.folder = folder or settings.COVER_IMAGE_BUCKET

    def _get_public_id(self, key: str) -> str:
        return f"{self.folder}/{key}"

    async def write(
        self,
        key: str,
        data: bytes,
        content_type: str = "application/octet-stream",
        *,
        overwrite: bool = True,
    ) -> None:
        # Run blocking Cloudinary upload in thread pool
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(
                None,
                partial(
                    cloudinary.uploader.upload,
                    data,
                    public_id=self._get_public_id(key),
                    overwrite=overwrite,
                    resource_type="image",
                ),
            )
        except cloudinary.exceptions.Error as e:
            raise BucketError(str(e)) from e

    def public_url(self, key: str) -> str:
        url, _ = cloudinary.utils.cloudinary_url(self._get_public_id(key), secure=True)
        return url

    async def exists(self, key: str) -> bool:
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(
                None,
                partial(cloudinary.api.resource, self._get_public_id(key)),
            )
        except cloudinary.exceptions.NotFound:
            return False
        except cloudinary.exceptions.Error as e:
            raise BucketError(str(e)) from e
        return True
