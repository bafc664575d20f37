"""Post repository for database operations."""

from sqlalchemy import desc, select

from postdeck.models import PostDB
from postdeck.repositories.base import BaseRepository


class PostRepository(BaseRepository[PostDB]):
    """Repository for Post rows."""

    model = PostDB
    resource = "Post"

    async def get_all(self, skip: int = 0, limit: int | None = None) -> list[PostDB]:
        """
        Get posts newest first.

        Ties on `created_at` are broken by id so the order is stable.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return, all when None

        Returns:
            list[PostDB]: Posts ordered by creation time descending
        """
        query = (
            select(PostDB)
            # pyrefly: ignore [bad-argument-type]
            .order_by(desc(PostDB.created_at), desc(PostDB.id))
            .offset(skip)
        )
        if limit is not None:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())
