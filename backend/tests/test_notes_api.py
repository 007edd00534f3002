"""
Notebox Backend - Notes API Tests
===================================

What:  End-to-end HTTP behaviour of /api/notes and /health.
How:   HTTPX AsyncClient over ASGITransport; every scenario runs once on the
       in-memory repository and once on the SQL repository over SQLite (or
       on a repository that always fails, for the 500 paths).

What we test:
    ✅ Create → get round trip, JSON shape (camelCase, ISO timestamps)
    ✅ 404 for unknown, malformed and deleted ids
    ✅ List ordering by last update
    ✅ 400 for invalid bodies, nothing stored
    ✅ 500 with a generic error body when the store fails
    ✅ Titles of any length
    ✅ Health, CORS and request-ID headers
    ✅ Access log lines keyed by route template and note id
    ✅ Unexpected failures still answer with the request ID
"""

import logging
from datetime import datetime

import pytest
from httpx import ASGITransport, AsyncClient

from notebox.main import create_app

UNKNOWN_ID = "6f1c2f4e-8f55-4a4b-9d1e-3a0d7f6b2c11"


def parse_ts(value):
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


async def create(client, title="A", content="B"):
    response = await client.post("/api/notes", json={"title": title, "content": content})
    assert response.status_code == 201
    return response.json()


class TestCreateAndGet:

    @pytest.mark.asyncio
    async def test_create_then_get_returns_identical_fields(self, test_client):
        created = await create(test_client, "A", "B")

        response = await test_client.get(f"/api/notes/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created
        assert created["title"] == "A"
        assert created["content"] == "B"

    @pytest.mark.asyncio
    async def test_note_json_shape(self, test_client):
        created = await create(test_client)

        assert set(created) == {"id", "title", "content", "createdAt", "updatedAt"}
        assert created["createdAt"] == created["updatedAt"]
        assert parse_ts(created["createdAt"]).tzinfo is not None

    @pytest.mark.asyncio
    async def test_repeated_get_is_stable(self, test_client):
        created = await create(test_client)

        first = await test_client.get(f"/api/notes/{created['id']}")
        second = await test_client.get(f"/api/notes/{created['id']}")

        assert first.json() == second.json()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("note_id", [UNKNOWN_ID, "not-a-uuid"])
    async def test_get_unknown_note(self, test_client, note_id):
        response = await test_client.get(f"/api/notes/{note_id}")

        assert response.status_code == 404
        assert response.json()["error"] == "Note not found"


class TestList:

    @pytest.mark.asyncio
    async def test_list_empty(self, test_client):
        response = await test_client.get("/api/notes")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_most_recently_updated_first(self, test_client):
        first = await create(test_client, "first", "1")
        second = await create(test_client, "second", "2")

        update = await test_client.put(
            f"/api/notes/{first['id']}", json={"title": "first", "content": "edited"}
        )
        assert update.status_code == 200

        notes = (await test_client.get("/api/notes")).json()

        assert [n["id"] for n in notes] == [first["id"], second["id"]]


class TestUpdate:

    @pytest.mark.asyncio
    async def test_update_note(self, test_client):
        created = await create(test_client, "old", "old")

        response = await test_client.put(
            f"/api/notes/{created['id']}", json={"title": "X", "content": "Y"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == created["id"]
        assert body["createdAt"] == created["createdAt"]
        assert body["title"] == "X"
        assert body["content"] == "Y"
        assert parse_ts(body["updatedAt"]) > parse_ts(created["updatedAt"])

    @pytest.mark.asyncio
    async def test_update_unknown_note(self, test_client):
        response = await test_client.put(
            f"/api/notes/{UNKNOWN_ID}", json={"title": "X", "content": "Y"}
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Note not found"


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_twice(self, test_client):
        created = await create(test_client)

        first = await test_client.delete(f"/api/notes/{created['id']}")
        second = await test_client.delete(f"/api/notes/{created['id']}")

        assert first.status_code == 204
        assert first.content == b""
        assert second.status_code == 404

    @pytest.mark.asyncio
    async def test_get_after_delete(self, test_client):
        created = await create(test_client)
        await test_client.delete(f"/api/notes/{created['id']}")

        response = await test_client.get(f"/api/notes/{created['id']}")

        assert response.status_code == 404


class TestValidation:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"content": "no title"},
            {"title": "no content"},
            {"title": "   ", "content": "blank title"},
            {"title": 42, "content": "wrong type"},
            {},
        ],
    )
    async def test_invalid_body_is_rejected(self, test_client, body):
        response = await test_client.post("/api/notes", json=body)

        assert response.status_code == 400
        payload = response.json()
        assert payload["error"] == "Invalid note payload"
        assert payload["details"]

        listing = await test_client.get("/api/notes")
        assert listing.json() == []

    @pytest.mark.asyncio
    async def test_malformed_json(self, test_client):
        response = await test_client.post(
            "/api/notes",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_empty_content_is_allowed(self, test_client):
        created = await create(test_client, "title only", "")
        assert created["content"] == ""

    @pytest.mark.asyncio
    async def test_invalid_update_body_reports_field(self, test_client):
        created = await create(test_client)

        response = await test_client.put(f"/api/notes/{created['id']}", json={"title": "X"})

        assert response.status_code == 400
        assert {"field": "content", "message": "Field required"} in response.json()["details"]

    @pytest.mark.asyncio
    async def test_long_titles_are_accepted(self, test_client):
        created = await create(test_client, "t" * 300, "c")

        response = await test_client.put(
            f"/api/notes/{created['id']}", json={"title": "u" * 1000, "content": "c"}
        )

        assert created["title"] == "t" * 300
        assert response.status_code == 200
        fetched = await test_client.get(f"/api/notes/{created['id']}")
        assert fetched.json()["title"] == "u" * 1000


class TestStoreFailure:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method, path, body, message",
        [
            ("GET", "/api/notes", None, "Error fetching notes"),
            ("GET", f"/api/notes/{UNKNOWN_ID}", None, "Error fetching note"),
            ("POST", "/api/notes", {"title": "t", "content": "c"}, "Error creating note"),
            ("PUT", f"/api/notes/{UNKNOWN_ID}", {"title": "t", "content": "c"}, "Error updating note"),
            ("DELETE", f"/api/notes/{UNKNOWN_ID}", None, "Error deleting note"),
        ],
    )
    async def test_store_failure_is_500(self, failing_client, method, path, body, message):
        response = await failing_client.request(method, path, json=body)

        assert response.status_code == 500
        assert response.json()["error"] == message
        assert "connection reset" not in response.text


class TestHealthAndMiddleware:

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    @pytest.mark.asyncio
    async def test_cors_allows_any_origin(self, test_client):
        response = await test_client.get("/api/notes", headers={"Origin": "http://localhost:5173"})

        assert response.headers["access-control-allow-origin"] == "*"

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get("/health", headers={"X-Request-ID": "abc123"})

        assert response.headers["x-request-id"] == "abc123"

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, test_client):
        response = await test_client.get(f"/api/notes/{UNKNOWN_ID}")

        assert response.headers["x-request-id"]
        assert response.json()["request_id"] == response.headers["x-request-id"]


class TestAccessLog:

    @staticmethod
    def access_records(caplog):
        return [r for r in caplog.records if r.name == "notebox.access"]

    @pytest.mark.asyncio
    async def test_line_names_route_template_and_note(self, test_client, caplog):
        created = await create(test_client)

        with caplog.at_level(logging.INFO, logger="notebox.access"):
            caplog.clear()
            await test_client.get(
                f"/api/notes/{created['id']}", headers={"X-Request-ID": "log-1"}
            )

        [record] = self.access_records(caplog)
        assert record.levelno == logging.INFO
        assert record.route == "/api/notes/{note_id}"
        assert record.note_id == created["id"]
        assert record.status == 200
        assert record.request_id == "log-1"
        assert record.getMessage().startswith(
            f"GET /api/notes/{{note_id}} note={created['id']} -> 200 in "
        )

    @pytest.mark.asyncio
    async def test_collection_routes_have_no_note_id(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="notebox.access"):
            await test_client.get("/api/notes")

        [record] = self.access_records(caplog)
        assert record.route == "/api/notes"
        assert record.note_id is None

    @pytest.mark.asyncio
    async def test_missing_note_logs_warning(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="notebox.access"):
            await test_client.delete(f"/api/notes/{UNKNOWN_ID}")

        [record] = self.access_records(caplog)
        assert record.levelno == logging.WARNING
        assert record.status == 404
        assert record.note_id == UNKNOWN_ID

    @pytest.mark.asyncio
    async def test_health_is_not_logged(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="notebox.access"):
            await test_client.get("/health")

        assert self.access_records(caplog) == []


class TestUnexpectedError:

    @pytest.mark.asyncio
    async def test_fallback_500_keeps_request_id(self, caplog):
        # No repository injected and no lifespan run: resolving the store fails
        app = create_app()
        transport = ASGITransport(app=app, raise_app_exceptions=False)

        with caplog.at_level(logging.ERROR, logger="notebox.access"):
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get("/api/notes", headers={"X-Request-ID": "boom-1"})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error", "request_id": "boom-1"}
        assert response.headers["x-request-id"] == "boom-1"
        [record] = [r for r in caplog.records if r.name == "notebox.access"]
        assert record.status == 500
