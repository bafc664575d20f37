"""Category request and response models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from postdeck.configs import MAX_CATEGORY_NAME_LENGTH


class CategoryCreate(BaseModel):
    """Category creation payload."""

    name: str = Field(
        ...,
        max_length=MAX_CATEGORY_NAME_LENGTH,
        description="Category name",
        examples=["Travel"],
    )


class CategoryUpdate(CategoryCreate):
    """Category rename payload."""


class CategoryRef(BaseModel):
    """Category as embedded in a post."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class CategoryResponse(BaseModel):
    """Category as returned by the API."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    name: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


class CategoryDeleteResponse(BaseModel):
    """Confirmation returned after a category is deleted."""

    msg: str
    detached_posts: int = Field(default=0, alias="detachedPosts")

    model_config = ConfigDict(populate_by_name=True)
