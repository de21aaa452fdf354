"""
Campus Market Backend: Test Configuration (conftest.py)
=========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Autouse (every test):
    └── isolated_storage: points DATA_DIR, UPLOAD_DIR and SCORES_PATH at a
        fresh tmp_path so no test sees another test's JSON documents

    On request:
    ├── data_dir / upload_dir: the isolated directories as Paths
    ├── write_scores: writes a score export into the isolated data dir
    ├── sample_image_bytes: minimal PNG bytes for upload tests
    └── test_client: HTTPX AsyncClient bound to the FastAPI app
"""

import json
import os
import tempfile

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Override settings for testing BEFORE any app imports
os.environ["DATA_DIR"] = tempfile.mkdtemp(prefix="campus_market_data_")
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="campus_market_uploads_")
os.environ["LOG_LEVEL"] = "WARNING"

from campus_market.config import settings  # noqa: E402

ID_COLUMN = "21 nisan 06 mayıs harcama ve puan"
SCORE_COLUMN = "__EMPTY"


@pytest.fixture(autouse=True)
def isolated_storage(tmp_path, monkeypatch):
    """Give each test its own data and upload directories."""
    data = tmp_path / "data"
    uploads = tmp_path / "uploads"
    data.mkdir()
    uploads.mkdir()

    monkeypatch.setattr(settings, "data_dir", str(data))
    monkeypatch.setattr(settings, "upload_dir", str(uploads))
    monkeypatch.setattr(settings, "scores_path", None)
    monkeypatch.setattr(settings, "serialize_writes", True)
    return tmp_path


@pytest.fixture
def data_dir(isolated_storage):
    return isolated_storage / "data"


@pytest.fixture
def upload_dir(isolated_storage):
    return isolated_storage / "uploads"


@pytest.fixture
def write_scores(data_dir):
    """
    Write a score export in the spreadsheet layout.

    Usage:
        write_scores([("1024", "1.116,50 ₺"), ("Müşteri No", "Puan")])
    """
    def _write(rows):
        records = [{ID_COLUMN: identifier, SCORE_COLUMN: score} for identifier, score in rows]
        path = data_dir / "scores.json"
        path.write_text(json.dumps(records, ensure_ascii=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_image_bytes():
    """PNG signature plus a truncated IHDR chunk; enough bytes to stand in for an image."""
    return (
        b"\x89PNG\r\n\x1a\n"
        b"\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06\x00\x00\x00"
    )


@pytest_asyncio.fixture
async def test_client():
    """
    HTTPX AsyncClient routed straight into the FastAPI app (no server).

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/announcements")
            assert response.status_code == 200
    """
    from campus_market.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
