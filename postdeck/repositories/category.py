"""Category repository for database operations."""

from sqlalchemy import select

from postdeck.models import CategoryDB
from postdeck.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[CategoryDB]):
    """Repository for Category rows."""

    model = CategoryDB
    resource = "Category"

    async def get_all(self) -> list[CategoryDB]:
        """Get all categories ordered by name."""
        result = await self.session.execute(
            # pyrefly: ignore [bad-argument-type]
            select(CategoryDB).order_by(CategoryDB.name, CategoryDB.id),
        )
        return list(result.scalars().all())
