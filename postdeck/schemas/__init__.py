from pydantic import BaseModel

from postdeck.schemas.auth import Identity
from postdeck.schemas.category import (
    CategoryCreate,
    CategoryDeleteResponse,
    CategoryRef,
    CategoryResponse,
    CategoryUpdate,
)
from postdeck.schemas.post import (
    BulkDeleteRequest,
    BulkDeleteResult,
    PostCreate,
    PostResponse,
    PostUpdate,
)
from postdeck.schemas.upload import CoverImageUploadResponse


class MessageResponse(BaseModel):
    msg: str


class HealthCheckResponse(BaseModel):
    version: str
    status: str
    timestamp: str


__all__ = [
    "BulkDeleteRequest",
    "BulkDeleteResult",
    "CategoryCreate",
    "CategoryDeleteResponse",
    "CategoryRef",
    "CategoryResponse",
    "CategoryUpdate",
    "CoverImageUploadResponse",
    "HealthCheckResponse",
    "Identity",
    "MessageResponse",
    "PostCreate",
    "PostResponse",
    "PostUpdate",
]
