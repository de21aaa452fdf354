"""
Campus Market Backend: HTTP API Tests
=======================================

What:  End-to-end tests through the FastAPI app using the HTTPX test_client.
How:   Requests go straight into the ASGI app; every test has its own data
       and upload directories (see conftest.isolated_storage).

Covered:
    ✅ Banner, health check, request ID header, error body shape
    ✅ Scoreboard ordering and missing export
    ✅ Announcements / discounts / polls create, list, delete
    ✅ Voting success and failure statuses
    ✅ Business hours default and replacement
    ✅ Image upload, serving, and rejection cases
    ✅ Corrupt rows and the catch-all 500 body
"""

import re

import pytest
from httpx import ASGITransport, AsyncClient

from campus_market.config import settings


# ═══════════════════════════════════════════════════════════════════════════
# Service-level endpoints
# ═══════════════════════════════════════════════════════════════════════════

class TestService:

    @pytest.mark.asyncio
    async def test_banner(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.text == "Campus Market API is running!"

    @pytest.mark.asyncio
    async def test_health_reports_writable_directories(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["data_dir"] == data["upload_dir"] == "writable"

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get("/", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"

    @pytest.mark.asyncio
    async def test_request_id_generated_when_absent(self, test_client):
        response = await test_client.get("/")

        assert re.fullmatch(r"[0-9a-f]{8}", response.headers["X-Request-ID"])

    @pytest.mark.asyncio
    async def test_unknown_route_uses_error_body(self, test_client):
        response = await test_client.get("/api/nothing-here", headers={"X-Request-ID": "r-404"})

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found", "request_id": "r-404"}


# ═══════════════════════════════════════════════════════════════════════════
# Scoreboard
# ═══════════════════════════════════════════════════════════════════════════

class TestScores:

    @pytest.mark.asyncio
    async def test_ranking_highest_first(self, test_client, write_scores):
        write_scores([
            ("Müşteri No", "Puan"),
            ("1001", "999,99 ₺"),
            ("1002", "1.116,50 ₺"),
            ("", ""),
            ("1003", "12,00"),
        ])

        response = await test_client.get("/api/scores")

        assert response.status_code == 200
        assert response.json() == [
            {"id": "1002", "score": "1.116,50 ₺"},
            {"id": "1001", "score": "999,99 ₺"},
            {"id": "1003", "score": "12,00"},
        ]

    @pytest.mark.asyncio
    async def test_numeric_flag_adds_value(self, test_client, write_scores):
        write_scores([("7", "1.000,25")])

        response = await test_client.get("/api/scores", params={"numeric": "true"})

        assert response.json() == [{"id": "7", "score": "1.000,25", "value": 1000.25}]

    @pytest.mark.asyncio
    async def test_missing_export_is_server_error(self, test_client):
        response = await test_client.get("/api/scores")

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "Scores could not be read."
        assert data["details"]
        assert "request_id" in data


# ═══════════════════════════════════════════════════════════════════════════
# Announcements and discounted products
# ═══════════════════════════════════════════════════════════════════════════

class TestAnnouncements:

    @pytest.mark.asyncio
    async def test_create_and_list_newest_first(self, test_client):
        first = await test_client.post("/api/announcements", json={"title": "Açılış", "body": "Yarın"})
        second = await test_client.post(
            "/api/announcements",
            json={"title": "Kampanya", "body": "Çay %20", "image": "/uploads/1-2.png"},
        )

        assert first.status_code == 200
        created = second.json()
        assert created["title"] == "Kampanya"
        assert created["image"] == "/uploads/1-2.png"
        assert created["createdAt"].endswith("Z")
        assert isinstance(created["id"], int)

        listing = (await test_client.get("/api/announcements")).json()
        assert [a["id"] for a in listing] == [created["id"], first.json()["id"]]
        assert listing[1]["image"] is None

    @pytest.mark.asyncio
    async def test_missing_body_is_rejected(self, test_client, data_dir):
        response = await test_client.post("/api/announcements", json={"title": "Only title"})

        assert response.status_code == 400
        assert response.json()["error"] == "Title and body are required."
        assert not (data_dir / "announcements.json").exists()

    @pytest.mark.asyncio
    async def test_delete_removes_record(self, test_client):
        created = (await test_client.post("/api/announcements", json={"title": "t", "body": "b"})).json()

        response = await test_client.delete(f"/api/announcements/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert (await test_client.get("/api/announcements")).json() == []

    @pytest.mark.asyncio
    async def test_delete_absent_id_still_succeeds(self, test_client):
        await test_client.post("/api/announcements", json={"title": "t", "body": "b"})

        response = await test_client.delete("/api/announcements/12345")

        assert response.json() == {"success": True}
        assert len((await test_client.get("/api/announcements")).json()) == 1

    @pytest.mark.asyncio
    async def test_non_integer_id_is_bad_request(self, test_client):
        response = await test_client.delete("/api/announcements/abc")

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request data."


class TestDiscounts:

    @pytest.mark.asyncio
    async def test_create_fills_optional_fields(self, test_client):
        response = await test_client.post("/api/discounts", json={"name": "Simit", "price": "15,00 ₺"})

        assert response.status_code == 200
        data = response.json()
        assert data["description"] == ""
        assert data["image"] is None
        assert data["price"] == "15,00 ₺"

    @pytest.mark.asyncio
    async def test_missing_price_is_rejected(self, test_client):
        response = await test_client.post("/api/discounts", json={"name": "Simit"})

        assert response.status_code == 400
        assert response.json()["error"] == "Name and price are required."

    @pytest.mark.asyncio
    async def test_delete(self, test_client):
        keep = (await test_client.post("/api/discounts", json={"name": "a", "price": "1"})).json()
        drop = (await test_client.post("/api/discounts", json={"name": "b", "price": "2"})).json()

        await test_client.delete(f"/api/discounts/{drop['id']}")

        assert [d["id"] for d in (await test_client.get("/api/discounts")).json()] == [keep["id"]]


# ═══════════════════════════════════════════════════════════════════════════
# Polls
# ═══════════════════════════════════════════════════════════════════════════

class TestPolls:

    async def _create(self, client, options=("Evet", "Hayır")):
        response = await client.post("/api/polls", json={"question": "Kantin açılsın mı?", "options": list(options)})
        assert response.status_code == 200
        return response.json()

    @pytest.mark.asyncio
    async def test_create_poll_with_zero_votes(self, test_client):
        poll = await self._create(test_client)

        assert poll["options"] == [{"text": "Evet", "votes": 0}, {"text": "Hayır", "votes": 0}]
        assert (await test_client.get("/api/polls")).json() == [poll]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [{"question": "q"}, {"question": "q", "options": ["one"]}, {"options": ["a", "b"]}],
    )
    async def test_invalid_poll_is_rejected(self, test_client, body):
        response = await test_client.post("/api/polls", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "A question and at least 2 options are required."

    @pytest.mark.asyncio
    async def test_vote(self, test_client):
        poll = await self._create(test_client)

        response = await test_client.post("/api/polls/vote", json={"pollId": poll["id"], "optionIndex": 1})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert [o["votes"] for o in data["poll"]["options"]] == [0, 1]

    @pytest.mark.asyncio
    async def test_vote_unknown_poll(self, test_client):
        await self._create(test_client)

        response = await test_client.post("/api/polls/vote", json={"pollId": 1, "optionIndex": 0})

        assert response.status_code == 404
        assert response.json()["error"] == "Poll not found."

    @pytest.mark.asyncio
    async def test_vote_option_out_of_range(self, test_client):
        poll = await self._create(test_client)

        response = await test_client.post("/api/polls/vote", json={"pollId": poll["id"], "optionIndex": 2})

        assert response.status_code == 400
        assert response.json()["error"] == "Option not found."

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{}, {"pollId": "1", "optionIndex": 0}, {"pollId": 1, "optionIndex": 0.5}])
    async def test_vote_with_invalid_data(self, test_client, body):
        response = await test_client.post("/api/polls/vote", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid vote data."

    @pytest.mark.asyncio
    async def test_delete_poll(self, test_client):
        poll = await self._create(test_client)

        response = await test_client.delete(f"/api/polls/{poll['id']}")

        assert response.json() == {"success": True}
        assert (await test_client.get("/api/polls")).json() == []


# ═══════════════════════════════════════════════════════════════════════════
# Business hours
# ═══════════════════════════════════════════════════════════════════════════

class TestHours:

    @pytest.mark.asyncio
    async def test_default_schedule_on_first_read(self, test_client, data_dir):
        response = await test_client.get("/api/hours")

        assert response.status_code == 200
        data = response.json()
        assert data["weekly"]["Friday"] == {"opensAt": "09:00", "closesAt": "21:00"}
        assert data["weekly"]["Sunday"] == {"opensAt": None, "closesAt": None}
        assert data["specialDays"] == []
        assert (data_dir / "hours.json").exists()

    @pytest.mark.asyncio
    async def test_replace_schedule(self, test_client):
        body = {
            "weekly": {"Monday": {"opensAt": "08:30", "closesAt": "17:00"}},
            "specialDays": [{"date": "2025-05-19", "opensAt": None, "closesAt": None}],
        }

        response = await test_client.post("/api/hours", json=body)

        assert response.status_code == 200
        assert response.json() == body
        assert (await test_client.get("/api/hours")).json() == body

    @pytest.mark.asyncio
    async def test_replace_without_weekly_is_rejected(self, test_client):
        response = await test_client.post("/api/hours", json={"specialDays": []})

        assert response.status_code == 400
        assert response.json()["error"] == "Weekly hours are required."

    @pytest.mark.asyncio
    async def test_malformed_time_is_rejected(self, test_client):
        response = await test_client.post(
            "/api/hours", json={"weekly": {"Monday": {"opensAt": "25:00", "closesAt": "18:00"}}}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request data."


# ═══════════════════════════════════════════════════════════════════════════
# Uploads
# ═══════════════════════════════════════════════════════════════════════════

class TestUploads:

    @pytest.mark.asyncio
    async def test_upload_and_serve(self, test_client, sample_image_bytes):
        response = await test_client.post(
            "/api/upload",
            files={"image": ("poster.PNG", sample_image_bytes, "image/png")},
        )

        assert response.status_code == 200
        url = response.json()["url"]
        assert re.fullmatch(r"/uploads/\d+-\d+\.png", url)

        served = await test_client.get(url)
        assert served.status_code == 200
        assert served.content == sample_image_bytes
        assert served.headers["Cache-Control"] == "public, max-age=86400"

    @pytest.mark.asyncio
    async def test_wrong_extension_rejected(self, test_client, upload_dir):
        response = await test_client.post(
            "/api/upload",
            files={"image": ("report.pdf", b"%PDF-1.4", "application/pdf")},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Only image files can be uploaded."
        assert list(upload_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_missing_file_rejected(self, test_client):
        response = await test_client.post(
            "/api/upload",
            files={"photo": ("a.png", b"x", "image/png")},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "No file was uploaded."

    @pytest.mark.asyncio
    async def test_oversized_file_rejected(self, test_client, upload_dir, monkeypatch):
        monkeypatch.setattr(settings, "max_upload_size", 16)

        response = await test_client.post(
            "/api/upload",
            files={"image": ("big.jpg", b"x" * 17, "image/jpeg")},
        )

        assert response.status_code == 400
        assert "too large" in response.json()["error"]
        assert list(upload_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_unknown_upload_is_not_found(self, test_client):
        response = await test_client.get("/uploads/0-0.png")

        assert response.status_code == 404
        assert response.json()["error"] == "File '0-0.png' not found."


# ═══════════════════════════════════════════════════════════════════════════
# Server errors
# ═══════════════════════════════════════════════════════════════════════════

class TestServerErrors:

    @pytest.mark.asyncio
    async def test_non_object_rows_are_storage_errors(self, test_client, data_dir):
        (data_dir / "announcements.json").write_text('[null, {"id": 1}]', encoding="utf-8")

        response = await test_client.delete("/api/announcements/1")

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "Could not read announcement data."
        assert "entry 0" in data["details"]

    @pytest.mark.asyncio
    async def test_unexpected_error_returns_generic_body(self, data_dir):
        """Records that no longer match the response model end in the catch-all handler."""
        from campus_market.main import app

        (data_dir / "announcements.json").write_text('[{"id": 1}]', encoding="utf-8")

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/announcements")

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "An unexpected error occurred."
        assert "title" in data["details"]
