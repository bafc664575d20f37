"""
Storage services package.

This package provides blob buckets for cover image uploads, with support
for the local filesystem, Supabase Storage and Cloudinary.
"""

from postdeck.configs.settings import settings
from postdeck.services.storage.base import BlobBucket, BucketError
from postdeck.services.storage.cloudinary_storage import CloudinaryBucket
from postdeck.services.storage.local import LocalBucket
from postdeck.services.storage.supabase_storage import SupabaseBucket


def get_bucket() -> BlobBucket:
    """
    Get the configured blob bucket.

    Returns the implementation selected by the STORAGE_PROVIDER setting.
    """
    if settings.STORAGE_PROVIDER == "cloudinary":
        return CloudinaryBucket()
    if settings.STORAGE_PROVIDER == "supabase":
        return SupabaseBucket()
    return LocalBucket()


__all__ = [
    "BlobBucket",
    "BucketError",
    "CloudinaryBucket",
    "LocalBucket",
    "SupabaseBucket",
    "get_bucket",
]
