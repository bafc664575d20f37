# tests/routes/test_auth_routes.py
"""Authorization ordering on admin routes."""

import pytest
from httpx import AsyncClient

ADMIN_MUTATIONS = [
    ("POST", "/admin/posts"),
    ("PUT", "/admin/posts/p1"),
    ("DELETE", "/admin/posts/p1"),
    ("POST", "/admin/posts/bulk-delete"),
    ("POST", "/admin/categories"),
    ("PUT", "/admin/categories/c1"),
    ("DELETE", "/admin/categories/c1"),
    ("POST", "/admin/categories/bulk-delete"),
    ("POST", "/admin/uploads/cover-image"),
]


class TestAdminAuthorization:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(("method", "path"), ADMIN_MUTATIONS)
    async def test_missing_credential_is_401(self, client: AsyncClient, method: str, path: str) -> None:
        response = await client.request(method, path)

        assert response.status_code == 401
        assert response.json() == {"error": "Missing authorization credential"}
        assert response.headers["www-authenticate"] == "Bearer"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("method", "path"), ADMIN_MUTATIONS)
    async def test_non_admin_is_403(
        self,
        client: AsyncClient,
        editor_headers: dict[str, str],
        method: str,
        path: str,
    ) -> None:
        response = await client.request(method, path, headers=editor_headers)

        assert response.status_code == 403
        assert response.json() == {"error": "Administrator privilege required"}

    @pytest.mark.asyncio
    async def test_invalid_token_is_401(self, client: AsyncClient) -> None:
        response = await client.delete("/admin/posts/p1", headers={"Authorization": "Bearer forged"})
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid or expired credential"}

    @pytest.mark.asyncio
    async def test_raw_token_without_prefix(self, client: AsyncClient, admin_token: str) -> None:
        """The admin front end sends the bare token."""
        response = await client.delete("/admin/posts/missing", headers={"Authorization": admin_token})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_reads_need_no_credential(self, client: AsyncClient) -> None:
        assert (await client.get("/posts")).status_code == 200
        assert (await client.get("/categories")).status_code == 200
