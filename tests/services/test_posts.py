# tests/services/test_posts.py
"""Tests for PostService."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import func, select

from postdeck.db import SessionMaker
from postdeck.errors import (
    DanglingReferenceError,
    NotFoundError,
    UploadFailedError,
    ValidationError,
)
from postdeck.models import CategoryDB, PostCategoryDB, PostDB
from postdeck.schemas import PostCreate, PostUpdate
from postdeck.services import BlobStore, CategoryService, PostService
from postdeck.services.storage import BucketError, LocalBucket

ABC_KEY = "private/900150983cd24fb0d6963f7d28e17f72"


async def count_rows(session_maker: SessionMaker, model: type) -> int:
    async with session_maker() as session:
        result = await session.execute(select(func.count()).select_from(model))
        return result.scalar_one()


@pytest.mark.usefixtures("categories")
class TestCreatePost:
    """Tests for PostService.create_post."""

    @pytest.mark.asyncio
    async def test_create_with_cover_bytes(
        self,
        post_service: PostService,
        bucket: LocalBucket,
    ) -> None:
        post = await post_service.create_post(
            PostCreate(title="Post A", content="Hello", category_ids=["cat1", "cat2"]),
            cover_image=b"abc",
            content_type="image/png",
        )

        assert post.cover_image_key == ABC_KEY
        assert post.cover_image_url == f"/uploads/cover_image/{ABC_KEY}"
        assert [c.id for c in post.categories] == ["cat2", "cat1"]  # sorted by name: Food, Travel
        assert await bucket.exists(ABC_KEY)

    @pytest.mark.asyncio
    async def test_create_with_pre_resolved_key(self, post_service: PostService) -> None:
        post = await post_service.create_post(
            PostCreate(title="Post A", content="Hello", cover_image_key=ABC_KEY),
        )
        assert post.cover_image_key == ABC_KEY
        assert post.categories == []

    @pytest.mark.asyncio
    async def test_create_without_cover(self, post_service: PostService) -> None:
        post = await post_service.create_post(PostCreate(title="Post A", content="Hello"))
        assert post.cover_image_key is None
        assert post.cover_image_url is None

    @pytest.mark.asyncio
    async def test_empty_cover_bytes_are_stored(self, post_service: PostService) -> None:
        post = await post_service.create_post(PostCreate(title="Post A", content="Hello"), cover_image=b"")
        assert post.cover_image_key == "private/d41d8cd98f00b204e9800998ecf8427e"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("title", "content", "field"),
        [("", "Hello", "title"), ("   ", "Hello", "title"), ("Post A", "", "content"), ("Post A", "\n\t", "content")],
    )
    async def test_blank_text_rejected(
        self,
        post_service: PostService,
        session_maker: SessionMaker,
        title: str,
        content: str,
        field: str,
    ) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await post_service.create_post(PostCreate(title=title, content=content))

        assert exc_info.value.field == field
        assert await count_rows(session_maker, PostDB) == 0

    @pytest.mark.asyncio
    async def test_malformed_cover_key_rejected(self, post_service: PostService) -> None:
        with pytest.raises(ValidationError, match="Invalid cover image key"):
            await post_service.create_post(
                PostCreate(title="Post A", content="Hello", cover_image_key="private/not-a-digest"),
            )

    @pytest.mark.asyncio
    async def test_dangling_category_creates_nothing(
        self,
        post_service: PostService,
        session_maker: SessionMaker,
    ) -> None:
        with pytest.raises(DanglingReferenceError) as exc_info:
            await post_service.create_post(
                PostCreate(title="Post A", content="Hello", category_ids=["cat1", "ghost"]),
            )

        assert exc_info.value.missing_ids == ["ghost"]
        assert await count_rows(session_maker, PostDB) == 0
        assert await count_rows(session_maker, PostCategoryDB) == 0

    @pytest.mark.asyncio
    async def test_upload_failure_leaves_no_post(self, session_maker: SessionMaker) -> None:
        """A failed cover upload aborts before any row is written."""
        bucket = MagicMock()
        bucket.write = AsyncMock(side_effect=BucketError("Bucket not found"))
        service = PostService(session_maker, BlobStore(bucket))

        with pytest.raises(UploadFailedError, match="Bucket not found"):
            await service.create_post(
                PostCreate(title="Post A", content="Hello", category_ids=["cat1"]),
                cover_image=b"abc",
            )

        assert await count_rows(session_maker, PostDB) == 0
        assert await count_rows(session_maker, PostCategoryDB) == 0


@pytest.mark.usefixtures("categories")
class TestUpdatePost:
    """Tests for PostService.update_post."""

    @pytest.mark.asyncio
    async def test_update_replaces_fields_and_tags(self, post_service: PostService) -> None:
        created = await post_service.create_post(
            PostCreate(title="Post A", content="Hello", category_ids=["cat1"]),
        )

        updated = await post_service.update_post(
            created.id,
            PostUpdate(title="Post A2", content="Bye", cover_image_key=ABC_KEY, category_ids=["cat3"]),
        )

        assert updated.title == "Post A2"
        assert updated.content == "Bye"
        assert updated.cover_image_key == ABC_KEY
        assert [c.id for c in updated.categories] == ["cat3"]
        assert updated.created_at == created.created_at
        assert updated.updated_at is not None

    @pytest.mark.asyncio
    async def test_omitted_cover_key_is_kept(self, post_service: PostService) -> None:
        created = await post_service.create_post(
            PostCreate(title="Post A", content="Hello", cover_image_key=ABC_KEY),
        )
        updated = await post_service.update_post(
            created.id,
            PostUpdate(title="Post A", content="Edited", category_ids=[]),
        )
        assert updated.cover_image_key == ABC_KEY

    @pytest.mark.asyncio
    async def test_explicit_null_cover_key_clears(self, post_service: PostService) -> None:
        created = await post_service.create_post(
            PostCreate(title="Post A", content="Hello", cover_image_key=ABC_KEY),
        )
        updated = await post_service.update_post(
            created.id,
            PostUpdate.model_validate(
                {"title": "Post A", "content": "Hello", "coverImageKey": None, "categoryIds": []},
            ),
        )
        assert updated.cover_image_key is None

    @pytest.mark.asyncio
    async def test_update_unknown_post(self, post_service: PostService) -> None:
        with pytest.raises(NotFoundError, match="Post with ID missing not found"):
            await post_service.update_post("missing", PostUpdate(title="T", content="C", category_ids=[]))

    @pytest.mark.asyncio
    async def test_dangling_update_keeps_previous_state(self, post_service: PostService) -> None:
        created = await post_service.create_post(
            PostCreate(title="Post A", content="Hello", category_ids=["cat1"]),
        )

        with pytest.raises(DanglingReferenceError):
            await post_service.update_post(
                created.id,
                PostUpdate(title="Changed", content="Changed", category_ids=["ghost"]),
            )

        current = await post_service.get_post(created.id)
        assert current.title == "Post A"
        assert [c.id for c in current.categories] == ["cat1"]


@pytest.mark.usefixtures("categories")
class TestDeleteAndList:
    @pytest.mark.asyncio
    async def test_delete_removes_post_and_associations_but_not_blob(
        self,
        post_service: PostService,
        session_maker: SessionMaker,
        bucket: LocalBucket,
    ) -> None:
        post = await post_service.create_post(
            PostCreate(title="Post A", content="Hello", category_ids=["cat1", "cat2"]),
            cover_image=b"abc",
        )

        await post_service.delete_post(post.id)

        assert await count_rows(session_maker, PostDB) == 0
        assert await count_rows(session_maker, PostCategoryDB) == 0
        assert await bucket.exists(ABC_KEY)

    @pytest.mark.asyncio
    async def test_delete_unknown_post(self, post_service: PostService) -> None:
        with pytest.raises(NotFoundError):
            await post_service.delete_post("missing")

    @pytest.mark.asyncio
    async def test_list_newest_first_with_categories(self, post_service: PostService) -> None:
        first = await post_service.create_post(PostCreate(title="First", content="1", category_ids=["cat1"]))
        second = await post_service.create_post(PostCreate(title="Second", content="2"))

        posts = await post_service.list_posts()

        assert [p.id for p in posts] == [second.id, first.id]
        assert [c.name for c in posts[1].categories] == ["Travel"]
        assert posts[0].categories == []

    @pytest.mark.asyncio
    async def test_list_pagination(self, post_service: PostService) -> None:
        for i in range(3):
            await post_service.create_post(PostCreate(title=f"Post {i}", content="x"))

        page = await post_service.list_posts(skip=1, limit=1)
        assert [p.title for p in page] == ["Post 1"]

    @pytest.mark.asyncio
    async def test_get_unknown_post(self, post_service: PostService) -> None:
        with pytest.raises(NotFoundError):
            await post_service.get_post("missing")


@pytest.mark.usefixtures("categories")
class TestBulkDelete:
    """Fail-fast bulk delete keeps what was deleted before the failure."""

    @pytest.mark.asyncio
    async def test_all_deleted(self, post_service: PostService) -> None:
        a = await post_service.create_post(PostCreate(title="A", content="a"))
        b = await post_service.create_post(PostCreate(title="B", content="b"))

        result = await post_service.bulk_delete([a.id, b.id])

        assert result.deleted == [a.id, b.id]
        assert result.failed_id is None
        assert result.completed

    @pytest.mark.asyncio
    async def test_stops_at_first_failure(
        self,
        post_service: PostService,
        session_maker: SessionMaker,
    ) -> None:
        a = await post_service.create_post(PostCreate(title="A", content="a"))
        c = await post_service.create_post(PostCreate(title="C", content="c"))

        result = await post_service.bulk_delete([a.id, "missing", c.id])

        assert result.deleted == [a.id]
        assert result.failed_id == "missing"
        assert result.error == "Post with ID missing not found"
        assert not result.completed
        remaining = await post_service.list_posts()
        assert [p.id for p in remaining] == [c.id]
        assert await count_rows(session_maker, PostDB) == 1


class TestEndToEndScenario:
    @pytest.mark.asyncio
    async def test_upload_create_then_delete_category(
        self,
        post_service: PostService,
        category_service: CategoryService,
        blob_store: BlobStore,
        session_maker: SessionMaker,
    ) -> None:
        """Same bytes give the same key; deleting the category keeps the post untagged."""
        async with session_maker() as session:
            session.add(CategoryDB(id="cat1", name="Travel"))
            await session.commit()

        first_key = await blob_store.put(b"abc")
        second_key = await blob_store.put(b"abc")
        assert first_key == second_key == ABC_KEY

        await post_service.create_post(
            PostCreate(title="Post A", content="Hello", cover_image_key=first_key, category_ids=["cat1"]),
        )
        listed = await post_service.list_posts()
        assert len(listed) == 1
        assert listed[0].title == "Post A"
        assert listed[0].cover_image_key == ABC_KEY
        assert [c.id for c in listed[0].categories] == ["cat1"]

        await category_service.delete_category("cat1")

        listed = await post_service.list_posts()
        assert len(listed) == 1
        assert listed[0].title == "Post A"
        assert listed[0].categories == []
