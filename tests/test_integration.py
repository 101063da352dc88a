"""Integration tests.

These tests exercise the full request → service → repository → HTTP client
pipeline against a fake ChromaDB.

What is mocked:
  - The ChromaDB REST API, per-test with respx

What is NOT mocked (runs real code):
  - FastAPI routes, dependency injection, template rendering
  - ChromaViewerService, the normalizer and the document assembler
  - ChromaRepository URL building and the shared httpx client
"""

from __future__ import annotations

import json

import httpx
import respx

CHROMA_URL = "http://chroma.test:8000"
SCOPE = f"{CHROMA_URL}/api/v2/tenants/default_tenant/databases/default_database"

_COLLECTION = {
    "id": "5f1c",
    "name": "notes",
    "metadata": {"hnsw:space": "cosine"},
    "dimension": 384,
    "tenant": "default_tenant",
    "database": "default_database",
    "configuration_json": {},
}
_GET = {
    "ids": ["n1", "n2"],
    "documents": ["alpha text", None],
    "metadatas": [{"source": "a.md"}, None],
    "embeddings": None,
}


# ── GET / ─────────────────────────────────────────────────────────────────────

class TestIntegrationCollections:
    @respx.mock
    def test_lists_collections(self, client):
        respx.get(f"{SCOPE}/collections").mock(
            return_value=httpx.Response(200, json=[_COLLECTION])
        )

        resp = client.get("/")

        assert resp.status_code == 200
        assert "notes" in resp.text
        assert "hnsw:space" in resp.text

    @respx.mock
    def test_connection_refused(self, client):
        respx.get(f"{SCOPE}/collections").mock(
            side_effect=httpx.ConnectError("[Errno 111] Connection refused")
        )

        resp = client.get("/")

        assert resp.status_code == 503
        assert f"Could not connect to ChromaDB at {CHROMA_URL}" in resp.text

    @respx.mock
    def test_validation_error_detail(self, client):
        respx.get(f"{SCOPE}/collections").mock(
            return_value=httpx.Response(
                422, json={"detail": [{"loc": ["path", "tenant"], "msg": "field required"}]}
            )
        )

        resp = client.get("/api/collections")

        assert resp.status_code == 422
        assert resp.json()["detail"] == (
            "Failed to fetch collections. Status: 422: field required"
        )


# ── GET /collections/{name} ───────────────────────────────────────────────────

class TestIntegrationCollectionDetail:
    @respx.mock
    def test_full_page(self, client):
        respx.get(f"{SCOPE}/collections/notes").mock(
            return_value=httpx.Response(200, json=_COLLECTION)
        )
        respx.get(f"{SCOPE}/collections/5f1c/count").mock(
            return_value=httpx.Response(200, json=2)
        )
        get_route = respx.post(f"{SCOPE}/collections/5f1c/get").mock(
            return_value=httpx.Response(200, json=_GET)
        )

        resp = client.get("/collections/notes?limit=10")

        assert resp.status_code == 200
        assert "alpha text" in resp.text
        assert "a.md" in resp.text
        assert "All (2)" in resp.text
        body = json.loads(get_route.calls.last.request.content)
        assert body == {"include": ["documents", "metadatas"], "limit": 10}

    @respx.mock
    def test_missing_collection_never_fetches_documents(self, client):
        respx.get(f"{SCOPE}/collections/ghost").mock(
            return_value=httpx.Response(
                404, json={"error": "NotFoundError", "message": "Collection [ghost] does not exist"}
            )
        )

        resp = client.get("/collections/ghost")

        assert resp.status_code == 404
        assert "Collection [ghost] does not exist" in resp.text
        assert respx.calls.call_count == 1

    @respx.mock
    def test_count_failure_keeps_documents(self, client):
        respx.get(f"{SCOPE}/collections/notes").mock(
            return_value=httpx.Response(200, json=_COLLECTION)
        )
        respx.get(f"{SCOPE}/collections/5f1c/count").mock(
            return_value=httpx.Response(500, text="Internal Server Error")
        )
        respx.post(f"{SCOPE}/collections/5f1c/get").mock(
            return_value=httpx.Response(200, json=_GET)
        )

        resp = client.get("/api/collections/notes")

        assert resp.status_code == 200
        body = resp.json()
        assert [d["id"] for d in body["documents"]] == ["n1", "n2"]
        assert body["documents"][1]["content"] is None
        assert body["count"] is None
        assert body["count_error"].endswith("Response: Internal Server Error")

    @respx.mock
    def test_documents_failure_keeps_count(self, client):
        respx.get(f"{SCOPE}/collections/notes").mock(
            return_value=httpx.Response(200, json=_COLLECTION)
        )
        respx.get(f"{SCOPE}/collections/5f1c/count").mock(
            return_value=httpx.Response(200, json=2)
        )
        respx.post(f"{SCOPE}/collections/5f1c/get").mock(
            return_value=httpx.Response(400, json={"error": {"message": "bad include"}})
        )

        resp = client.get("/collections/notes")

        assert resp.status_code == 200
        assert "Error fetching documents" in resp.text
        assert "bad include" in resp.text
        assert "All (2)" in resp.text

    @respx.mock
    def test_non_numeric_limit_falls_back_to_default(self, client):
        respx.get(f"{SCOPE}/collections/notes").mock(
            return_value=httpx.Response(200, json=_COLLECTION)
        )
        respx.get(f"{SCOPE}/collections/5f1c/count").mock(
            return_value=httpx.Response(200, json=2)
        )
        get_route = respx.post(f"{SCOPE}/collections/5f1c/get").mock(
            return_value=httpx.Response(200, json=_GET)
        )

        resp = client.get("/collections/notes?limit=abc")

        assert resp.status_code == 200
        assert json.loads(get_route.calls.last.request.content)["limit"] == 2
