"""Repository for the post/category association table."""

from collections import defaultdict
from collections.abc import Iterable

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from postdeck.models import CategoryDB, PostCategoryDB


class PostCategoryRepository:
    """Low-level queries over association rows; no transaction control."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def categories_for_posts(
        self,
        post_ids: Iterable[str],
    ) -> dict[str, list[CategoryDB]]:
        """
        Batch load categories for many posts in one query.

        Returns:
            dict[str, list[CategoryDB]]: Categories per post id, sorted by name.
                Posts without tags map to an empty list.
        """
        ids = list(post_ids)
        by_post: dict[str, list[CategoryDB]] = defaultdict(list)
        if not ids:
            return by_post

        query = (
            select(PostCategoryDB.post_id, CategoryDB)
            # pyrefly: ignore [bad-argument-type]
            .join(CategoryDB, CategoryDB.id == PostCategoryDB.category_id)
            # pyrefly: ignore [missing-attribute]
            .where(PostCategoryDB.post_id.in_(ids))
            .order_by(CategoryDB.name, CategoryDB.id)
        )
        result = await self.session.execute(query)
        for post_id, category in result.all():
            by_post[post_id].append(category)
        return by_post

    async def delete_for_post(self, post_id: str) -> int:
        result = await self.session.execute(
            # pyrefly: ignore [bad-argument-type]
            delete(PostCategoryDB).where(PostCategoryDB.post_id == post_id),
        )
        return result.rowcount or 0

    async def delete_for_category(self, category_id: str) -> int:
        result = await self.session.execute(
            # pyrefly: ignore [bad-argument-type]
            delete(PostCategoryDB).where(PostCategoryDB.category_id == category_id),
        )
        return result.rowcount or 0

    async def add_many(self, post_id: str, category_ids: Iterable[str]) -> None:
        self.session.add_all(
            PostCategoryDB(post_id=post_id, category_id=category_id)
            for category_id in sorted(set(category_ids))
        )
        await self.session.flush()
