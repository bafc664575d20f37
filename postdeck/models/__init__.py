"""Database models for the application."""

from postdeck.models.category import CategoryDB
from postdeck.models.post import PostDB
from postdeck.models.post_category import PostCategoryDB
from postdeck.models.profile import ProfileDB

__all__ = ["CategoryDB", "PostCategoryDB", "PostDB", "ProfileDB"]
