"""
Pytest configuration and fixtures for blog client tests.

Thunks run against the in-memory gateway; images are generated with Pillow.
"""

from __future__ import annotations

import io

import pytest
from PIL import Image

from frontend.app import memory_gateway
from frontend.config import Settings
from frontend.local_storage import LocalStorage
from frontend.models import PendingImage
from frontend.thunks import ThunkContext
from state.store import Store


@pytest.fixture
def settings(tmp_path, monkeypatch):
    """Settings isolated from the developer's environment."""
    monkeypatch.setenv("BLOG_STORAGE_PATH", str(tmp_path / "storage.json"))
    monkeypatch.setenv("BLOG_API_URL", "https://project.example.co")
    monkeypatch.setenv("BLOG_API_KEY", "anon-key")
    monkeypatch.delenv("EMAIL_PATTERN", raising=False)
    monkeypatch.delenv("COMMENT_IMAGE_MAX_CHARS", raising=False)
    return Settings()


@pytest.fixture
def local_storage(settings):
    return LocalStorage(settings.STORAGE_PATH)


@pytest.fixture
def gateway():
    return memory_gateway()


@pytest.fixture
def store():
    return Store()


@pytest.fixture
def ctx(gateway, store, settings):
    return ThunkContext(gateway=gateway, store=store, settings=settings)


def _png(width: int, height: int, mode: str = "RGB") -> bytes:
    buffer = io.BytesIO()
    color = (200, 30, 30, 255) if mode == "RGBA" else (200, 30, 30)
    Image.new(mode, (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_bytes():
    """A small opaque PNG."""
    return _png(40, 20)


@pytest.fixture
def wide_png_bytes():
    """A PNG wider than the default 800px bound."""
    return _png(1600, 800)


@pytest.fixture
def make_png():
    return _png


@pytest.fixture
def pending_image(png_bytes):
    return PendingImage(data=png_bytes, alt_text="red")


@pytest.fixture
def ann(gateway):
    """A registered identity with its profile row."""
    gateway.auth_users["ann@gmail.com"] = {"id": "u-ann", "password": "secret"}
    gateway.seed(
        "tbluser",
        [
            {
                "userID": "u-ann",
                "name": "Ann",
                "email": "ann@gmail.com",
                "image": "data:image/png;base64,YXZhdGFy",
                "create_timestamp": "2026-01-01T00:00:00Z",
            }
        ],
    )
    return {"id": "u-ann", "name": "Ann", "email": "ann@gmail.com"}


@pytest.fixture
def bob(gateway):
    gateway.auth_users["bob@gmail.com"] = {"id": "u-bob", "password": "secret"}
    gateway.seed(
        "tbluser",
        [{"userID": "u-bob", "name": "Bob", "email": "bob@gmail.com", "image": None}],
    )
    return {"id": "u-bob", "name": "Bob", "email": "bob@gmail.com"}


@pytest.fixture
def seeded_blog(gateway, ann):
    """One blog by Ann with two images and one comment."""
    gateway.seed(
        "tblBlog",
        [{"id": "b1", "title": "Hello", "content": "World", "authorID": "u-ann", "created_at": "2026-01-02T00:00:00Z"}],
    )
    gateway.seed(
        "tblimage",
        [
            {"imageID": "i2", "blogID": "b1", "imagePath": "data:b", "altText": "second", "sort_order": 1},
            {"imageID": "i1", "blogID": "b1", "imagePath": "data:a", "altText": "first", "sort_order": 0},
        ],
    )
    gateway.seed(
        "tblcomment",
        [
            {
                "commentID": "c1",
                "blogID": "b1",
                "userID": "u-ann",
                "content": "first!",
                "image": "data:image/jpeg;base64,b2xk",
                "created_at": "2026-01-02T01:00:00Z",
            }
        ],
    )
    return "b1"
