# tests/routes/conftest.py
"""Pytest fixtures for route tests."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from postdeck.clients import JwtIdentityProvider
from postdeck.db import SessionMaker, get_session_maker
from postdeck.dependencies import get_blob_bucket, get_identity_provider_state
from postdeck.main import app
from postdeck.managers import limiter
from postdeck.services.storage import LocalBucket


@pytest.fixture
async def client(
    session_maker: SessionMaker,
    bucket: LocalBucket,
    seed_profiles: None,
) -> AsyncGenerator[AsyncClient]:
    """
    Async HTTP client bound to a temporary database and bucket.

    Identities are real HS256 tokens verified against the seeded profiles.
    """
    provider = JwtIdentityProvider(session_maker, secret="test-secret", audience="authenticated")
    app.dependency_overrides[get_session_maker] = lambda: session_maker
    app.dependency_overrides[get_blob_bucket] = lambda: bucket
    app.dependency_overrides[get_identity_provider_state] = lambda: provider
    limiter.enabled = False
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac
    limiter.enabled = True
    app.dependency_overrides.clear()
