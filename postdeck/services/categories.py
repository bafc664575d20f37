"""Category lifecycle service."""

from collections.abc import Iterable
from logging import getLogger

from postdeck.configs import file_logger
from postdeck.db.database import SessionMaker, transaction
from postdeck.errors.base import BaseAppError
from postdeck.models import CategoryDB
from postdeck.repositories import CategoryRepository
from postdeck.schemas.category import CategoryCreate, CategoryDeleteResponse, CategoryUpdate
from postdeck.schemas.post import BulkDeleteResult
from postdeck.services.posts import require_text
from postdeck.services.tags import TagRelationManager
from postdeck.utils.helpers import utcnow

logger = file_logger(getLogger(__name__))


class CategoryService:
    """Creates, renames and deletes categories; deleting detaches posts first."""

    def __init__(
        self,
        session_maker: SessionMaker,
        tags: TagRelationManager | None = None,
    ) -> None:
        self.session_maker = session_maker
        self.tags = tags or TagRelationManager()

    async def create_category(self, data: CategoryCreate) -> CategoryDB:
        name = require_text(data.name, "name").strip()
        async with transaction(self.session_maker) as session:
            category = await CategoryRepository(session).add(CategoryDB(name=name))

        logger.info(f"Created category {category.id} ({category.name})")
        return category

    async def update_category(self, category_id: str, data: CategoryUpdate) -> CategoryDB:
        """
        Rename a category.

        Raises:
            NotFoundError: If the category does not exist
            ValidationError: If the name is blank
        """
        name = require_text(data.name, "name").strip()
        async with transaction(self.session_maker) as session:
            repo = CategoryRepository(session)
            category = await repo.get_or_raise(category_id)
            category = await repo.update(category, {"name": name, "updated_at": utcnow()})

        logger.info(f"Renamed category {category_id} to {name}")
        return category

    async def delete_category(self, category_id: str) -> CategoryDeleteResponse:
        """
        Delete a category after detaching it from every post.

        Detaching and deleting happen in one transaction; the posts
        themselves are kept.

        Raises:
            NotFoundError: If the category does not exist
        """
        async with transaction(self.session_maker) as session:
            repo = CategoryRepository(session)
            category = await repo.get_or_raise(category_id)
            detached = await self.tags.detach_all(session, category_id)
            await repo.delete(category)

        logger.info(f"Deleted category {category_id} ({category.name})")
        return CategoryDeleteResponse(
            msg=f"Category {category.name} deleted",
            detached_posts=detached,
        )

    async def get_category(self, category_id: str) -> CategoryDB:
        async with transaction(self.session_maker) as session:
            return await CategoryRepository(session).get_or_raise(category_id)

    async def list_categories(self) -> list[CategoryDB]:
        async with transaction(self.session_maker) as session:
            return await CategoryRepository(session).get_all()

    async def bulk_delete(self, category_ids: Iterable[str]) -> BulkDeleteResult:
        """Delete categories in order, stopping at the first failure."""
        result = BulkDeleteResult()
        for category_id in category_ids:
            try:
                await self.delete_category(category_id)
            except BaseAppError as e:
                logger.warning(f"Bulk delete stopped at category {category_id}: {e.detail}")
                result.failed_id = category_id
                result.error = e.detail
                break
            result.deleted.append(category_id)
        return result
