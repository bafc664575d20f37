"""Operator profile model holding the administrator flag."""

from typing import cast

from sqlalchemy import Boolean
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String


class ProfileDB(SQLModel, table=True):
    """Profile keyed by the identity provider's subject id."""

    __tablename__ = cast("declared_attr[str]", "profiles")

    id: str = Field(
        sa_column=Column(String(64), primary_key=True, nullable=False),
        description="Subject id issued by the identity provider",
    )
    is_admin: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False),
        description="Administrator privilege flag",
    )
