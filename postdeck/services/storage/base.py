"""
Base storage protocol for blob buckets.

This module defines the interface a backing bucket must offer to the
content-addressed blob store, allowing different implementations
(local, Supabase Storage, Cloudinary).
"""

from abc import abstractmethod
from typing import Protocol


class BucketError(Exception):
    """Raised by bucket implementations with the backing store's diagnostic."""


class BlobBucket(Protocol):
    """
    Protocol defining the interface for blob buckets.

    Implementations raise `BucketError` (or let an I/O error escape) on
    failure; the blob store maps either to `UploadFailedError`.
    """

    @abstractmethod
    async def write(
        self,
        key: str,
        data: bytes,
        content_type: str = "application/octet-stream",
        *,
        overwrite: bool = True,
    ) -> None:
        """
        Write bytes to the bucket at `key`.

        Args:
            key: Object key inside the bucket
            data: Raw bytes
            content_type: MIME type stored with the object
            overwrite: Replace an existing object instead of failing
        """
        ...

    @abstractmethod
    def public_url(self, key: str) -> str:
        """
        Derive the publicly fetchable URL for `key`.

        Pure function of the key and configuration; no network call.
        """
        ...

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check whether an object is stored at `key`."""
        ...
