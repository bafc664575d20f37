"""Category database model using SQLModel."""

from datetime import datetime
from typing import cast

from sqlalchemy import DateTime
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String

from postdeck.models.post import new_id
from postdeck.utils.helpers import utcnow


class CategoryDB(SQLModel, table=True):
    """Category (label) that posts can be tagged with."""

    __tablename__ = cast("declared_attr[str]", "categories")

    id: str = Field(
        default_factory=new_id,
        sa_column=Column(String(36), primary_key=True, nullable=False),
        description="Category ID",
    )
    name: str = Field(
        sa_column=Column(String(100), nullable=False, index=True),
        description="Category name",
    )
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Creation timestamp",
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Last update timestamp",
    )
