from postdeck.services.auth import AuthorizationGuard
from postdeck.services.blob_store import BlobStore, content_digest
from postdeck.services.categories import CategoryService
from postdeck.services.cover_image import CoverImageService
from postdeck.services.posts import PostService
from postdeck.services.tags import TagRelationManager

__all__ = [
    "AuthorizationGuard",
    "BlobStore",
    "CategoryService",
    "CoverImageService",
    "PostService",
    "TagRelationManager",
    "content_digest",
]
