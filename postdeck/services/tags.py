"""
Post/category association management.

All methods run inside the caller's session; the caller's `transaction()`
decides commit or rollback, which is what makes `set_tags` all-or-nothing.
"""

from collections.abc import Iterable
from logging import getLogger

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from postdeck.configs import file_logger
from postdeck.errors.validation import DanglingReferenceError
from postdeck.models import CategoryDB
from postdeck.repositories import CategoryRepository, PostCategoryRepository, PostRepository

logger = file_logger(getLogger(__name__))


class TagRelationManager:
    """Maintains the many-to-many association between posts and categories."""

    async def set_tags(
        self,
        session: AsyncSession,
        post_id: str,
        category_ids: Iterable[str],
    ) -> set[str]:
        """
        Replace the post's association set with exactly `category_ids`.

        The post row is locked first, so two concurrent replacements on the
        same post are serialized and the result is one set or the other,
        never a mix.

        Args:
            session: Session of the enclosing transaction
            post_id: Post whose tags are replaced
            category_ids: The complete new set of category ids

        Returns:
            set[str]: The association set now stored

        Raises:
            NotFoundError: If the post does not exist
            DanglingReferenceError: If any category id does not exist
        """
        wanted = set(category_ids)
        await PostRepository(session).get_or_raise(post_id, for_update=True)

        missing = wanted - await CategoryRepository(session).existing_ids(wanted)
        if missing:
            raise DanglingReferenceError(sorted(missing))

        links = PostCategoryRepository(session)
        await links.delete_for_post(post_id)
        try:
            await links.add_many(post_id, wanted)
        except IntegrityError as e:
            # A category was deleted between the existence check and the insert;
            # the failed flush poisons the session, so the exact id is unknown
            logger.warning(f"Foreign key rejected tags for post {post_id}: {e.orig or e}")
            raise DanglingReferenceError(sorted(wanted)) from e

        return wanted

    async def detach_all(self, session: AsyncSession, category_id: str) -> int:
        """
        Remove every association referencing `category_id`.

        Post rows are never touched.

        Returns:
            int: Number of associations removed
        """
        removed = await PostCategoryRepository(session).delete_for_category(category_id)
        logger.info(f"Detached category {category_id} from {removed} post(s)")
        return removed

    async def detach_post(self, session: AsyncSession, post_id: str) -> int:
        """Remove every association of `post_id`."""
        return await PostCategoryRepository(session).delete_for_post(post_id)

    async def tags_for(
        self,
        session: AsyncSession,
        post_ids: Iterable[str],
    ) -> dict[str, list[CategoryDB]]:
        """Load categories for each of `post_ids`."""
        return await PostCategoryRepository(session).categories_for_posts(post_ids)
