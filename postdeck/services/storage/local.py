"""
Local filesystem bucket implementation.

Objects are stored under ``UPLOADS_DIR/<bucket>/<key>``. Suitable for
development and testing.
"""

from pathlib import Path
from uuid import uuid4

import aiofiles
import aiofiles.os

from postdeck.configs.settings import settings
from postdeck.services.storage.base import BucketError


class LocalBucket:
    """Local filesystem bucket served under ``/uploads``."""

    def __init__(self, root: Path | None = None, bucket: str | None = None) -> None:
        """Initialize local storage with configured paths."""
        self.bucket = bucket or settings.COVER_IMAGE_BUCKET
        self.uploads_dir = root or settings.UPLOADS_DIR
        self.base_path = self.uploads_dir / self.bucket

    def _get_file_path(self, key: str) -> Path:
        path = (self.base_path / key).resolve()
        if not path.is_relative_to(self.base_path.resolve()):
            mssg = f"Invalid object key: {key}"
            raise BucketError(mssg)
        return path

    async def write(
        self,
        key: str,
        data: bytes,
        content_type: str = "application/octet-stream",
        *,
        overwrite: bool = True,
    ) -> None:
        file_path = self._get_file_path(key)
        if not overwrite and file_path.exists():
            mssg = f"The resource already exists: {key}"
            raise BucketError(mssg)

        file_path.parent.mkdir(parents=True, exist_ok=True)
        # Concurrent writers each use their own temp file; readers never see a partial object
        tmp_path = file_path.with_name(f".{file_path.name}.{uuid4().hex}.tmp")
        try:
            async with aiofiles.open(tmp_path, "wb") as f:
                await f.write(data)
            await aiofiles.os.replace(tmp_path, file_path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise

    def public_url(self, key: str) -> str:
        return f"/uploads/{self.bucket}/{key}"

    async def exists(self, key: str) -> bool:
        return self._get_file_path(key).exists()
