"""Post database model using SQLModel."""

from datetime import datetime
from typing import cast
from uuid import uuid4

from pydantic import ConfigDict
from sqlalchemy import DateTime, Index, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String

from postdeck.utils.helpers import utcnow


def new_id() -> str:
    return str(uuid4())


class PostDB(SQLModel, table=True):
    """
    Post database model.

    The cover image is referenced by its content-addressed blob key only;
    the blob itself lives in the bucket and may be shared between posts.
    """

    __tablename__ = cast("declared_attr[str]", "posts")

    __table_args__ = (Index("ix_posts_created_at_id", "created_at", "id"),)

    id: str = Field(
        default_factory=new_id,
        sa_column=Column(String(36), primary_key=True, nullable=False),
        description="Post ID",
    )
    title: str = Field(
        sa_column=Column(String(200), nullable=False),
        description="Post title",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Post body (markup is sanitized at render time)",
    )
    cover_image_key: str | None = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Content-addressed key of the cover image blob",
    )

    # Timestamps (timezone-aware)
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Creation timestamp (immutable)",
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "title": "Post A",
                "content": "Hello world",
                "cover_image_key": "private/900150983cd24fb0d6963f7d28e17f72",
            },
        },
    )
