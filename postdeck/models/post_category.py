"""Association table between posts and categories."""

from datetime import datetime
from typing import cast

from sqlalchemy import DateTime
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel, String

from postdeck.utils.helpers import utcnow


class PostCategoryDB(SQLModel, table=True):
    """
    A single (post, category) association.

    The composite primary key enforces uniqueness of the pair; both foreign
    keys reject dangling references.
    """

    __tablename__ = cast("declared_attr[str]", "post_categories")

    post_id: str = Field(
        sa_column=Column(
            "post_id",
            String(36),
            ForeignKey("posts.id", ondelete="CASCADE"),
            primary_key=True,
            nullable=False,
        ),
    )
    category_id: str = Field(
        sa_column=Column(
            "category_id",
            String(36),
            ForeignKey("categories.id", ondelete="CASCADE"),
            primary_key=True,
            nullable=False,
            index=True,
        ),
    )
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
