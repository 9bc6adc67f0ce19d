"""Shared test fixtures for the BeautyMag catalog test suite."""

from __future__ import annotations

import io
from collections.abc import AsyncGenerator, Callable
from pathlib import Path

import docx
import pytest
from httpx import ASGITransport, AsyncClient

from beautymag.core.config import Settings, get_settings
from beautymag.main import app
from beautymag.modules.catalog.store import CatalogStore


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def settings(tmp_path: Path, upload_dir: Path) -> Settings:
    """Settings pointing the catalog and temp uploads into the test's tmp dir."""
    return Settings(
        catalog_path=str(tmp_path / "PRODUCTS_PAYLOAD.json"),
        upload_tmp_dir=str(upload_dir),
        brand_tokens=[],
        content_base_url="https://beautymag.example/productos",
        _env_file=None,  # type: ignore[call-arg]
    )


@pytest.fixture
def store(settings: Settings) -> CatalogStore:
    return CatalogStore(settings.catalog_path)


@pytest.fixture
def make_docx() -> Callable[..., bytes]:
    """Build a .docx in memory from paragraph strings."""

    def _make(*paragraphs: str) -> bytes:
        document = docx.Document()
        for text in paragraphs:
            document.add_paragraph(text)
        buf = io.BytesIO()
        document.save(buf)
        return buf.getvalue()

    return _make


@pytest.fixture
async def client(settings: Settings) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client that talks directly to the FastAPI ASGI app."""
    app.dependency_overrides[get_settings] = lambda: settings
    transport = ASGITransport(app=app)  # type: ignore[arg-type]
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_settings, None)
