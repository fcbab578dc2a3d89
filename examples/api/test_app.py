"""Tests for the API example — groups, wildcards, JSON, group middleware."""

import json

from groute.testing import TestClient


class TestInfo:
    async def test_nested_group_route(self, client: TestClient) -> None:
        response = await client.get("/api/v1/info")
        assert response.status == 200
        assert json.loads(response.text) == {"name": "items", "version": 1}

    async def test_cors_headers_from_api_group(self, client: TestClient) -> None:
        response = await client.get("/api/v1/info", headers={"Origin": "https://x.example"})
        assert response.header("access-control-allow-origin") == "*"


class TestItems:
    async def test_empty_list(self, client: TestClient) -> None:
        response = await client.get("/api/v1/items")
        data = json.loads(response.text)
        assert data["data"] == []
        assert data["meta"]["total"] == 0

    async def test_create_and_get(self, client: TestClient) -> None:
        create = await client.post("/api/v1/items", json={"title": "Write docs"})
        assert create.status == 201
        item_id = json.loads(create.text)["data"]["id"]

        response = await client.get(f"/api/v1/items/{item_id}")
        assert response.status == 200
        assert json.loads(response.text)["data"]["title"] == "Write docs"

    async def test_create_requires_title(self, client: TestClient) -> None:
        response = await client.post("/api/v1/items", json={"title": "  "})
        assert response.status == 400

    async def test_update(self, client: TestClient) -> None:
        create = await client.post("/api/v1/items", json={"title": "Draft"})
        item_id = json.loads(create.text)["data"]["id"]

        response = await client.put(
            f"/api/v1/items/{item_id}", body=json.dumps({"done": True}).encode()
        )
        data = json.loads(response.text)["data"]
        assert data["done"] is True
        assert data["title"] == "Draft"

    async def test_delete_and_missing(self, client: TestClient) -> None:
        create = await client.post("/api/v1/items", json={"title": "Temp"})
        item_id = json.loads(create.text)["data"]["id"]

        assert (await client.delete(f"/api/v1/items/{item_id}")).status == 200
        assert (await client.get(f"/api/v1/items/{item_id}")).status == 404

    async def test_non_numeric_id(self, client: TestClient) -> None:
        assert (await client.get("/api/v1/items/abc")).status == 404

    async def test_method_not_allowed(self, client: TestClient) -> None:
        response = await client.request("PATCH", "/api/v1/items")
        assert response.status == 405
        assert response.header("allow") == "GET, HEAD, POST"

    async def test_rest_wildcard(self, client: TestClient) -> None:
        response = await client.get("/api/v1/files/docs/guide/intro.md")
        assert json.loads(response.text) == {"path": "docs/guide/intro.md"}


class TestAdmin:
    async def test_token_required(self, client: TestClient) -> None:
        response = await client.delete("/api/v1/admin/items")
        assert response.status == 401

    async def test_token_accepted(self, client: TestClient) -> None:
        await client.post("/api/v1/items", json={"title": "A"})
        response = await client.delete(
            "/api/v1/admin/items", headers={"Authorization": "Bearer secret"}
        )
        assert response.status == 200
        assert json.loads(response.text) == {"deleted": 1}

    async def test_token_not_required_outside_admin(self, client: TestClient) -> None:
        assert (await client.get("/api/v1/items")).status == 200
