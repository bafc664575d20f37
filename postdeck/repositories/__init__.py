"""Repository layer for database operations."""

from postdeck.repositories.category import CategoryRepository
from postdeck.repositories.post import PostRepository
from postdeck.repositories.post_category import PostCategoryRepository
from postdeck.repositories.profile import ProfileRepository

__all__ = [
    "CategoryRepository",
    "PostCategoryRepository",
    "PostRepository",
    "ProfileRepository",
]
