# tests/clients/test_identity.py
"""Tests for identity provider clients."""

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock, patch

import pytest
from httpx import AsyncClient, ConnectError, MockTransport, Request, Response
from jose import jwt

from postdeck.clients import (
    IdentityProviderError,
    JwtIdentityProvider,
    SupabaseIdentityProvider,
    get_identity_provider,
)
from postdeck.db import SessionMaker
from postdeck.errors import ForbiddenError, UnauthenticatedError
from postdeck.schemas import Identity
from postdeck.services import AuthorizationGuard

SECRET = "test-secret"


def encode(claims: dict, secret: str = SECRET) -> str:
    return jwt.encode(claims, secret, algorithm="HS256")


class TestJwtIdentityProvider:
    """Tests for locally verified JWTs with privilege from the profiles table."""

    @pytest.fixture
    def provider(self, session_maker: SessionMaker) -> JwtIdentityProvider:
        return JwtIdentityProvider(session_maker, secret=SECRET, audience="authenticated")

    @pytest.mark.asyncio
    async def test_valid_token(self, provider: JwtIdentityProvider) -> None:
        token = encode({"sub": "user-1", "aud": "authenticated"})
        assert await provider.verify_credential(token) == "user-1"

    @pytest.mark.asyncio
    async def test_wrong_signature(self, provider: JwtIdentityProvider) -> None:
        token = encode({"sub": "user-1", "aud": "authenticated"}, secret="other")
        with pytest.raises(IdentityProviderError, match="Invalid token"):
            await provider.verify_credential(token)

    @pytest.mark.asyncio
    async def test_expired(self, provider: JwtIdentityProvider) -> None:
        expired = datetime.now(UTC) - timedelta(minutes=5)
        token = encode({"sub": "user-1", "aud": "authenticated", "exp": expired})
        with pytest.raises(IdentityProviderError):
            await provider.verify_credential(token)

    @pytest.mark.asyncio
    async def test_wrong_audience(self, provider: JwtIdentityProvider) -> None:
        token = encode({"sub": "user-1", "aud": "someone-else"})
        with pytest.raises(IdentityProviderError):
            await provider.verify_credential(token)

    @pytest.mark.asyncio
    async def test_missing_subject(self, provider: JwtIdentityProvider) -> None:
        token = encode({"aud": "authenticated"})
        with pytest.raises(IdentityProviderError, match="no subject"):
            await provider.verify_credential(token)

    @pytest.mark.asyncio
    async def test_garbage(self, provider: JwtIdentityProvider) -> None:
        with pytest.raises(IdentityProviderError):
            await provider.verify_credential("not-a-jwt")

    @pytest.mark.asyncio
    @pytest.mark.usefixtures("seed_profiles")
    async def test_privilege_flag_from_profiles(self, provider: JwtIdentityProvider) -> None:
        assert await provider.get_privilege_flag("admin-subject") is True
        assert await provider.get_privilege_flag("editor-subject") is False
        assert await provider.get_privilege_flag("unknown-subject") is False


class TestSupabaseIdentityProvider:
    """Tests for SupabaseIdentityProvider against mocked Auth and REST APIs."""

    @staticmethod
    def make_provider(handler) -> SupabaseIdentityProvider:
        return SupabaseIdentityProvider(
            client=AsyncClient(transport=MockTransport(handler)),
            base_url="https://project.supabase.co",
            anon_key="anon-key",
            service_key="service-key",
        )

    @pytest.mark.asyncio
    async def test_verify_credential(self) -> None:
        def handler(request: Request) -> Response:
            assert request.url.path == "/auth/v1/user"
            assert request.headers["authorization"] == "Bearer user-token"
            assert request.headers["apikey"] == "anon-key"
            return Response(200, json={"id": "user-1", "email": "a@example.com"})

        provider = self.make_provider(handler)
        assert await provider.verify_credential("user-token") == "user-1"

    @pytest.mark.asyncio
    async def test_rejected_credential(self) -> None:
        provider = self.make_provider(lambda request: Response(401, json={"msg": "invalid JWT"}))
        with pytest.raises(IdentityProviderError, match="401"):
            await provider.verify_credential("bad")

    @pytest.mark.asyncio
    async def test_unreachable(self) -> None:
        def handler(request: Request) -> Response:
            raise ConnectError("down", request=request)

        provider = self.make_provider(handler)
        with pytest.raises(IdentityProviderError, match="unreachable"):
            await provider.verify_credential("token")

    @pytest.mark.asyncio
    async def test_privilege_flag(self) -> None:
        def handler(request: Request) -> Response:
            assert request.url.path == "/rest/v1/profiles"
            assert request.url.params["id"] == "eq.user-1"
            assert request.url.params["select"] == "is_admin"
            return Response(200, json=[{"is_admin": True}])

        provider = self.make_provider(handler)
        assert await provider.get_privilege_flag("user-1") is True

    @pytest.mark.asyncio
    async def test_no_profile_means_no_privilege(self) -> None:
        provider = self.make_provider(lambda request: Response(200, json=[]))
        assert await provider.get_privilege_flag("user-1") is False

    @pytest.mark.asyncio
    async def test_lookup_failure(self) -> None:
        provider = self.make_provider(lambda request: Response(500, json={"message": "boom"}))
        with pytest.raises(IdentityProviderError, match="Privilege lookup failed"):
            await provider.get_privilege_flag("user-1")

    @pytest.mark.asyncio
    async def test_non_json_user_body(self) -> None:
        provider = self.make_provider(lambda request: Response(200, text="<html>gateway</html>"))
        with pytest.raises(IdentityProviderError, match="non-JSON"):
            await provider.verify_credential("token")

    @pytest.mark.asyncio
    async def test_non_json_profiles_body(self) -> None:
        provider = self.make_provider(lambda request: Response(200, text="<html>gateway</html>"))
        with pytest.raises(IdentityProviderError, match="non-JSON"):
            await provider.get_privilege_flag("user-1")

    @pytest.mark.asyncio
    async def test_error_object_instead_of_rows(self) -> None:
        provider = self.make_provider(lambda request: Response(200, json={"code": "PGRST116", "message": "x"}))
        with pytest.raises(IdentityProviderError, match="unexpected payload"):
            await provider.get_privilege_flag("user-1")

    @pytest.mark.asyncio
    async def test_guard_maps_malformed_bodies_to_401_and_403(self) -> None:
        guard = AuthorizationGuard(
            self.make_provider(lambda request: Response(200, text="<html>gateway</html>")),
        )

        with pytest.raises(UnauthenticatedError):
            await guard.authenticate("Bearer token")
        with pytest.raises(ForbiddenError):
            await guard.require_elevated(Identity(subject_id="user-1"))


class TestGetIdentityProvider:
    @pytest.mark.parametrize(
        ("setting", "class_name"),
        [("jwt", "JwtIdentityProvider"), ("supabase", "SupabaseIdentityProvider")],
    )
    def test_selects_by_setting(self, setting: str, class_name: str) -> None:
        with (
            patch("postdeck.clients.identity.settings") as mock_settings,
            patch(f"postdeck.clients.identity.{class_name}") as mock_class,
        ):
            mock_settings.IDENTITY_PROVIDER = setting
            instance = MagicMock()
            mock_class.return_value = instance
            assert get_identity_provider() is instance
