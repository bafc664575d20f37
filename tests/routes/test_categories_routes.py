# tests/routes/test_categories_routes.py
"""Tests for category routes."""

import pytest
from httpx import AsyncClient


class TestCategoryRoutes:
    @pytest.mark.asyncio
    async def test_create_and_list(self, client: AsyncClient, admin_headers: dict[str, str]) -> None:
        for name in ("Travel", "Food"):
            response = await client.post("/admin/categories", json={"name": name}, headers=admin_headers)
            assert response.status_code == 201

        response = await client.get("/categories")

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Food", "Travel"]
        assert "createdAt" in response.json()[0]

    @pytest.mark.asyncio
    async def test_blank_name_is_400(self, client: AsyncClient, admin_headers: dict[str, str]) -> None:
        response = await client.post("/admin/categories", json={"name": "  "}, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Name must not be empty"

    @pytest.mark.asyncio
    @pytest.mark.usefixtures("categories")
    async def test_rename(self, client: AsyncClient, admin_headers: dict[str, str]) -> None:
        response = await client.put("/admin/categories/cat1", json={"name": "Trips"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["name"] == "Trips"
        assert (await client.get("/categories/cat1")).json()["name"] == "Trips"

    @pytest.mark.asyncio
    async def test_rename_unknown_is_404(self, client: AsyncClient, admin_headers: dict[str, str]) -> None:
        response = await client.put("/admin/categories/missing", json={"name": "X"}, headers=admin_headers)
        assert response.status_code == 404
        assert response.json() == {"error": "Category with ID missing not found"}


@pytest.mark.usefixtures("categories")
class TestDeleteCategoryRoute:
    @pytest.mark.asyncio
    async def test_delete_names_category_and_keeps_posts(
        self,
        client: AsyncClient,
        admin_headers: dict[str, str],
    ) -> None:
        created = await client.post(
            "/admin/posts",
            data={"title": "Post A", "content": "Hello", "category_ids": ["cat1"]},
            headers=admin_headers,
        )
        post_id = created.json()["id"]

        response = await client.delete("/admin/categories/cat1", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"msg": "Category Travel deleted", "detachedPosts": 1}
        post = (await client.get(f"/posts/{post_id}")).json()
        assert post["title"] == "Post A"
        assert post["categories"] == []

    @pytest.mark.asyncio
    async def test_bulk_delete(self, client: AsyncClient, admin_headers: dict[str, str]) -> None:
        response = await client.post(
            "/admin/categories/bulk-delete",
            json={"ids": ["cat1", "cat2"]},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json() == {"deleted": ["cat1", "cat2"], "failedId": None, "error": None}
        assert [c["id"] for c in (await client.get("/categories")).json()] == ["cat3"]
