"""
Content-addressed cover image store.

A blob's key is a fixed prefix followed by the hex MD5 digest of its bytes,
so identical uploads always land on the same key and the bucket never holds
two copies of the same image. Writes are issued with overwrite allowed:
rewriting a key can only ever rewrite identical bytes.
"""

from hashlib import md5
from logging import getLogger
from re import compile as re_compile
from re import escape

from postdeck.configs import file_logger, settings
from postdeck.errors.upload import UploadFailedError
from postdeck.services.storage.base import BlobBucket, BucketError

logger = file_logger(getLogger(__name__))

HEX_DIGEST_LENGTH = 32


def content_digest(data: bytes) -> str:
    """Return the hex MD5 digest used to address `data`."""
    # Not used for security; the digest only needs to be stable
    return md5(data, usedforsecurity=False).hexdigest()


class BlobStore:
    """Stores cover images under keys derived from their content."""

    def __init__(self, bucket: BlobBucket, prefix: str | None = None) -> None:
        self.bucket = bucket
        self.prefix = prefix if prefix is not None else settings.COVER_IMAGE_KEY_PREFIX
        self._key_pattern = re_compile(rf"^{escape(self.prefix)}[0-9a-f]{{{HEX_DIGEST_LENGTH}}}$")

    def compute_key(self, data: bytes) -> str:
        return f"{self.prefix}{content_digest(data)}"

    def is_valid_key(self, key: str) -> bool:
        """Check that `key` has the shape of a key produced by `put`."""
        return bool(self._key_pattern.match(key))

    async def put(self, data: bytes, content_type: str = "application/octet-stream") -> str:
        """
        Store `data` and return its content-derived key.

        Calling this twice with the same bytes returns the same key and
        leaves exactly one object in the bucket.

        Args:
            data: Raw file bytes (empty content is allowed)
            content_type: MIME type recorded with the object

        Returns:
            str: The blob key, e.g. ``private/900150983cd24fb0d6963f7d28e17f72``

        Raises:
            UploadFailedError: If the bucket write fails
        """
        key = self.compute_key(data)
        try:
            await self.bucket.write(key, data, content_type, overwrite=True)
        except (BucketError, OSError) as e:
            logger.warning(f"Bucket write failed for {key}: {e}")
            raise UploadFailedError(str(e) or type(e).__name__, key=key) from e

        logger.info(f"Stored blob {key} ({len(data)} bytes)")
        return key

    def resolve_public_url(self, key: str) -> str:
        """Derive the public URL for a blob key without any network call."""
        return self.bucket.public_url(key)
