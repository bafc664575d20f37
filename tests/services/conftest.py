# tests/services/conftest.py
"""Pytest fixtures for services tests."""

import pytest

from postdeck.db import SessionMaker
from postdeck.models import PostDB
from postdeck.services import BlobStore, CategoryService, PostService, TagRelationManager


@pytest.fixture
def tags() -> TagRelationManager:
    return TagRelationManager()


@pytest.fixture
def post_service(
    session_maker: SessionMaker,
    blob_store: BlobStore,
    tags: TagRelationManager,
) -> PostService:
    return PostService(session_maker, blob_store, tags)


@pytest.fixture
def category_service(session_maker: SessionMaker, tags: TagRelationManager) -> CategoryService:
    return CategoryService(session_maker, tags)


@pytest.fixture
async def bare_post(session_maker: SessionMaker) -> PostDB:
    """A post row without any categories."""
    post = PostDB(id="post-1", title="Post A", content="Hello")
    async with session_maker() as session:
        session.add(post)
        await session.commit()
    return post
