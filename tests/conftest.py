# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Must happen before postdeck is imported anywhere: settings and the
# module-level engine are built at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["STORAGE_PROVIDER"] = "local"
os.environ["IDENTITY_PROVIDER"] = "jwt"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["JWT_AUDIENCE"] = "authenticated"
os.environ["LOG_TO_FILE"] = "false"
os.environ["ENVIRONMENT"] = "testing"

from collections.abc import AsyncGenerator  # noqa: E402
from pathlib import Path  # noqa: E402

import pytest  # noqa: E402
from jose import jwt  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine  # noqa: E402

from postdeck.db import SessionMaker, create_engine, create_session_maker, create_tables  # noqa: E402
from postdeck.models import CategoryDB, ProfileDB  # noqa: E402
from postdeck.services import BlobStore  # noqa: E402
from postdeck.services.storage import LocalBucket  # noqa: E402

TEST_JWT_SECRET = "test-secret"
ADMIN_SUBJECT = "admin-subject"
EDITOR_SUBJECT = "editor-subject"


def make_token(subject: str, secret: str = TEST_JWT_SECRET, audience: str = "authenticated") -> str:
    """Encode an HS256 token the way the identity provider issues them."""
    return jwt.encode({"sub": subject, "aud": audience}, secret, algorithm="HS256")


@pytest.fixture
async def db_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine]:
    """File-backed SQLite engine, so concurrent sessions see each other's commits."""
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'postdeck-test.db'}")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(db_engine: AsyncEngine) -> SessionMaker:
    return create_session_maker(db_engine)


@pytest.fixture
def bucket(tmp_path: Path) -> LocalBucket:
    return LocalBucket(root=tmp_path / "uploads", bucket="cover_image")


@pytest.fixture
def blob_store(bucket: LocalBucket) -> BlobStore:
    return BlobStore(bucket, prefix="private/")


@pytest.fixture
async def seed_profiles(session_maker: SessionMaker) -> None:
    """One administrator and one non-administrator profile."""
    async with session_maker() as session:
        session.add_all(
            [
                ProfileDB(id=ADMIN_SUBJECT, is_admin=True),
                ProfileDB(id=EDITOR_SUBJECT, is_admin=False),
            ],
        )
        await session.commit()


@pytest.fixture
async def categories(session_maker: SessionMaker) -> dict[str, CategoryDB]:
    """Categories keyed by id: cat1 (Travel), cat2 (Food), cat3 (Culture)."""
    rows = {
        "cat1": CategoryDB(id="cat1", name="Travel"),
        "cat2": CategoryDB(id="cat2", name="Food"),
        "cat3": CategoryDB(id="cat3", name="Culture"),
    }
    async with session_maker() as session:
        session.add_all(rows.values())
        await session.commit()
    return rows


@pytest.fixture
def admin_token() -> str:
    return make_token(ADMIN_SUBJECT)


@pytest.fixture
def editor_token() -> str:
    return make_token(EDITOR_SUBJECT)


@pytest.fixture
def admin_headers(admin_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def editor_headers(editor_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {editor_token}"}
