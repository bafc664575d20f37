"""
Post request and response models.

Request bodies accept camelCase keys (as sent by the admin front end) and
snake_case keys; responses are serialized in camelCase.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from postdeck.configs import MAX_BULK_DELETE, MAX_CONTENT_LENGTH, MAX_TITLE_LENGTH
from postdeck.schemas.category import CategoryRef


class PostWrite(BaseModel):
    """Fields shared by post creation and update."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(
        ...,
        max_length=MAX_TITLE_LENGTH,
        description="Post title (must not be blank)",
        examples=["Post A"],
    )
    content: str = Field(
        ...,
        max_length=MAX_CONTENT_LENGTH,
        description="Post body; markup is sanitized at render time",
    )
    cover_image_key: str | None = Field(
        default=None,
        alias="coverImageKey",
        description="Key returned by the cover image upload endpoint",
        examples=["private/900150983cd24fb0d6963f7d28e17f72"],
    )
    category_ids: list[str] = Field(
        default_factory=list,
        alias="categoryIds",
        description="Complete set of category ids for the post",
    )


class PostCreate(PostWrite):
    """Post creation payload (cover bytes, when any, travel separately)."""


class PostUpdate(PostWrite):
    """Post update payload; replaces title, content, cover key and categories."""

    category_ids: list[str] = Field(
        ...,
        alias="categoryIds",
        description="Complete set of category ids for the post; an empty list removes every tag",
    )


class PostResponse(BaseModel):
    """Post as returned by the API."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    content: str
    cover_image_key: str | None = Field(default=None, alias="coverImageKey")
    cover_image_url: str | None = Field(default=None, alias="coverImageUrl")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
    categories: list[CategoryRef] = Field(default_factory=list)


class BulkDeleteRequest(BaseModel):
    """Ids to delete, processed in the given order."""

    ids: list[str] = Field(..., min_length=1, max_length=MAX_BULK_DELETE)


class BulkDeleteResult(BaseModel):
    """
    Outcome of a fail-fast bulk delete.

    `deleted` lists what was removed before the first failure; `failed_id`
    and `error` describe that failure. Nothing is rolled back.
    """

    model_config = ConfigDict(populate_by_name=True)

    deleted: list[str] = Field(default_factory=list)
    failed_id: str | None = Field(default=None, alias="failedId")
    error: str | None = None

    @property
    def completed(self) -> bool:
        return self.failed_id is None
