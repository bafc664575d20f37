"""
Post lifecycle service.

Every operation opens its own transaction, so each create, update or
delete is atomic on its own. The cover image is stored before any row is
written: a failed upload leaves no post behind and a successful one at
worst leaves an unreferenced blob, which is harmless because blob keys are
content-addressed.
"""

from collections.abc import Iterable, Sequence
from logging import getLogger

from postdeck.configs import file_logger
from postdeck.db.database import SessionMaker, transaction
from postdeck.errors.base import BaseAppError
from postdeck.errors.validation import ValidationError
from postdeck.models import CategoryDB, PostDB
from postdeck.repositories import PostRepository
from postdeck.schemas.category import CategoryRef
from postdeck.schemas.post import BulkDeleteResult, PostCreate, PostResponse, PostUpdate
from postdeck.services.blob_store import BlobStore
from postdeck.services.tags import TagRelationManager
from postdeck.utils.helpers import utcnow

logger = file_logger(getLogger(__name__))


def require_text(value: str, field: str) -> str:
    """Reject values that are empty after stripping whitespace."""
    if not value or not value.strip():
        raise ValidationError(f"{field.capitalize()} must not be empty", field=field)
    return value


class PostService:
    """Creates, reads, updates and deletes posts with their cover and tags."""

    def __init__(
        self,
        session_maker: SessionMaker,
        blob_store: BlobStore,
        tags: TagRelationManager | None = None,
    ) -> None:
        self.session_maker = session_maker
        self.blob_store = blob_store
        self.tags = tags or TagRelationManager()

    def _check_cover_key(self, key: str | None) -> str | None:
        if key is None:
            return None
        if not self.blob_store.is_valid_key(key):
            raise ValidationError(f"Invalid cover image key: {key}", field="coverImageKey")
        return key

    def to_response(self, post: PostDB, categories: Sequence[CategoryDB]) -> PostResponse:
        """Build the API representation of a post and its categories."""
        key = post.cover_image_key
        return PostResponse(
            id=post.id,
            title=post.title,
            content=post.content,
            cover_image_key=key,
            cover_image_url=self.blob_store.resolve_public_url(key) if key else None,
            created_at=post.created_at,
            updated_at=post.updated_at,
            categories=[CategoryRef(id=c.id, name=c.name) for c in categories],
        )

    async def create_post(
        self,
        data: PostCreate,
        cover_image: bytes | None = None,
        content_type: str = "application/octet-stream",
    ) -> PostResponse:
        """
        Create a post, optionally storing its cover image first.

        Args:
            data: Title, content, category ids and an optional pre-resolved cover key
            cover_image: Raw cover bytes; takes precedence over ``data.cover_image_key``
            content_type: MIME type of ``cover_image``

        Returns:
            PostResponse: The created post with its categories

        Raises:
            ValidationError: If title or content is blank, or the cover key is malformed
            StorageError: If the cover upload or the database write fails
            DanglingReferenceError: If a category id does not exist
        """
        title = require_text(data.title, "title").strip()
        content = require_text(data.content, "content")

        if cover_image is not None:
            cover_key = await self.blob_store.put(cover_image, content_type)
        else:
            cover_key = self._check_cover_key(data.cover_image_key)

        async with transaction(self.session_maker) as session:
            post = await PostRepository(session).add(
                PostDB(title=title, content=content, cover_image_key=cover_key),
            )
            await self.tags.set_tags(session, post.id, data.category_ids)
            categories = await self.tags.tags_for(session, [post.id])

        logger.info(f"Created post {post.id} with {len(data.category_ids)} categories")
        return self.to_response(post, categories[post.id])

    async def update_post(self, post_id: str, data: PostUpdate) -> PostResponse:
        """
        Replace a post's title, content, cover key and categories.

        The cover key is left untouched when the payload omits it and cleared
        when it is explicitly null. ``created_at`` is never modified.

        Raises:
            NotFoundError: If the post does not exist
            ValidationError: If title or content is blank, or the cover key is malformed
            DanglingReferenceError: If a category id does not exist
        """
        values = {
            "title": require_text(data.title, "title").strip(),
            "content": require_text(data.content, "content"),
            "updated_at": utcnow(),
        }
        if "cover_image_key" in data.model_fields_set:
            values["cover_image_key"] = self._check_cover_key(data.cover_image_key)

        async with transaction(self.session_maker) as session:
            repo = PostRepository(session)
            post = await repo.get_or_raise(post_id, for_update=True)
            post = await repo.update(post, values)
            await self.tags.set_tags(session, post.id, data.category_ids)
            categories = await self.tags.tags_for(session, [post.id])

        logger.info(f"Updated post {post_id}")
        return self.to_response(post, categories[post.id])

    async def delete_post(self, post_id: str) -> None:
        """
        Delete a post and its category associations.

        The cover blob is left in the bucket; other posts may share it.

        Raises:
            NotFoundError: If the post does not exist
        """
        async with transaction(self.session_maker) as session:
            repo = PostRepository(session)
            post = await repo.get_or_raise(post_id, for_update=True)
            await self.tags.detach_post(session, post_id)
            await repo.delete(post)

        logger.info(f"Deleted post {post_id}")

    async def get_post(self, post_id: str) -> PostResponse:
        """
        Get a single post with its categories.

        Raises:
            NotFoundError: If the post does not exist
        """
        async with transaction(self.session_maker) as session:
            post = await PostRepository(session).get_or_raise(post_id)
            categories = await self.tags.tags_for(session, [post_id])
        return self.to_response(post, categories[post_id])

    async def list_posts(self, skip: int = 0, limit: int | None = None) -> list[PostResponse]:
        """List posts newest first, each with its categories."""
        async with transaction(self.session_maker) as session:
            posts = await PostRepository(session).get_all(skip=skip, limit=limit)
            categories = await self.tags.tags_for(session, [p.id for p in posts])
        return [self.to_response(post, categories[post.id]) for post in posts]

    async def bulk_delete(self, post_ids: Iterable[str]) -> BulkDeleteResult:
        """
        Delete posts one by one in the given order, stopping at the first failure.

        Each delete commits on its own; deletes that succeeded before a
        failure stay deleted.

        Returns:
            BulkDeleteResult: Ids deleted so far, plus the failing id and its error
        """
        result = BulkDeleteResult()
        for post_id in post_ids:
            try:
                await self.delete_post(post_id)
            except BaseAppError as e:
                logger.warning(f"Bulk delete stopped at post {post_id}: {e.detail}")
                result.failed_id = post_id
                result.error = e.detail
                break
            result.deleted.append(post_id)
        return result
