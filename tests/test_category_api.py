"""Tests for category and brand endpoints."""
from __future__ import annotations

import pytest

from app.core.security import AdminRole


@pytest.fixture
def headers(admin_headers):
    return admin_headers()


def _create(client, headers, name: str, **fields) -> dict:
    response = client.post("/admin/categories", json={"name": name, **fields}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestCategoryAdmin:
    def test_create_and_get(self, client, headers):
        created = _create(client, headers, "Strategy Games", description="Board games")

        fetched = client.get(f"/admin/categories/{created['id']}", headers=headers)

        assert fetched.status_code == 200
        assert fetched.json()["name"] == "Strategy Games"
        assert fetched.json()["isActive"] is True

    def test_paginated_list_with_search_and_filter(self, client, headers):
        _create(client, headers, "Running")
        _create(client, headers, "Trail Running")
        _create(client, headers, "Archived Running", isActive=False)
        _create(client, headers, "Hats")

        search = client.get("/admin/categories", params={"search": "running", "sort": "name:asc"}, headers=headers)
        active = client.get(
            "/admin/categories", params={"search": "running", "isActive": "true"}, headers=headers
        )

        assert [c["name"] for c in search.json()["items"]] == ["Archived Running", "Running", "Trail Running"]
        assert search.json()["pagination"]["totalItems"] == 3
        assert active.json()["pagination"]["totalItems"] == 2

    def test_update_ignores_null_name(self, client, headers):
        created = _create(client, headers, "Socks")

        updated = client.patch(
            f"/admin/categories/{created['id']}",
            json={"name": None, "description": "Warm socks"},
            headers=headers,
        )

        assert updated.json()["name"] == "Socks"
        assert updated.json()["description"] == "Warm socks"

    def test_missing_category_is_404(self, client, headers):
        assert client.get("/admin/categories/404", headers=headers).status_code == 404
        assert client.patch("/admin/categories/404", json={"name": "x"}, headers=headers).status_code == 404

    def test_delete_unlinks_products(self, client, headers, admin_headers):
        keep = _create(client, headers, "Keep")
        gone = _create(client, headers, "Gone")
        product = client.post(
            "/admin/products",
            json={
                "name": "Linked",
                "categories": [keep["id"], gone["id"]],
                "primaryCategoryId": gone["id"],
                "variants": [{"sku": "L-1", "price": 1, "quantity": 1}],
            },
            headers=headers,
        ).json()

        assert client.delete(f"/admin/categories/{gone['id']}", headers=headers).status_code == 401
        response = client.delete(
            f"/admin/categories/{gone['id']}", headers=admin_headers(AdminRole.SUPER_ADMIN)
        )

        assert response.status_code == 204
        after = client.get(f"/admin/products/{product['id']}", headers=headers).json()
        assert [c["id"] for c in after["categories"]] == [keep["id"]]
        assert after["primaryCategoryId"] is None

    def test_requires_admin_token(self, client):
        assert client.get("/admin/categories").status_code == 401
        assert client.post("/admin/categories", json={"name": "x"}).status_code == 401


class TestCategoryClient:
    def test_only_active_categories_are_public(self, client, headers):
        shown = _create(client, headers, "Shown")
        hidden = _create(client, headers, "Hidden", isActive=False)

        listing = client.get("/categories")

        assert [c["name"] for c in listing.json()] == ["Shown"]
        assert client.get(f"/categories/{shown['id']}").status_code == 200
        assert client.get(f"/categories/{hidden['id']}").status_code == 404


class TestBrandAdmin:
    def test_create_list_update(self, client, headers):
        created = client.post("/admin/brands", json={"name": "Café Noir"}, headers=headers)

        assert created.status_code == 201
        assert created.json()["slug"] == "cafe-noir"

        updated = client.patch(
            f"/admin/brands/{created.json()['id']}",
            json={"name": "Noir & Co", "isActive": False},
            headers=headers,
        )
        assert updated.json()["slug"] == "noir-and-co"
        assert updated.json()["isActive"] is False

        active = client.get("/admin/brands", params={"isActive": "true"}, headers=headers)
        assert active.json() == []

    def test_duplicate_brand_is_409(self, client, headers):
        client.post("/admin/brands", json={"name": "Acme"}, headers=headers)

        response = client.post("/admin/brands", json={"name": "Acme"}, headers=headers)

        assert response.status_code == 409

    def test_missing_brand_is_404(self, client, headers):
        assert client.patch("/admin/brands/9", json={"name": "x"}, headers=headers).status_code == 404

    def test_out_of_range_ids_are_422(self, client, headers):
        too_big = "99999999999999999999999"

        assert client.patch(f"/admin/brands/{too_big}", json={"name": "x"}, headers=headers).status_code == 422
        assert client.get(f"/admin/categories/{too_big}", headers=headers).status_code == 422
        assert client.get(f"/categories/{too_big}").status_code == 422
