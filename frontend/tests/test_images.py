"""Tests for client-side image encoding."""

from __future__ import annotations

import base64
import io
import logging

import pytest
from PIL import Image

from frontend.models import PendingImage
from frontend.services import images
from frontend.services.images import ImageReadError, ImageTooLargeError
from state.view_state import ImageDraftSet


def _decode(data_url: str) -> Image.Image:
    header, encoded = data_url.split(",", 1)
    assert header.endswith(";base64")
    return Image.open(io.BytesIO(base64.b64decode(encoded)))


def test_compress_downsizes_preserving_aspect_ratio(wide_png_bytes):
    data_url = images.compress(wide_png_bytes, max_width=800, quality=70)

    assert data_url.startswith("data:image/jpeg;base64,")
    img = _decode(data_url)
    assert img.format == "JPEG"
    assert img.size == (800, 400)


def test_compress_keeps_narrow_images(png_bytes):
    img = _decode(images.compress(png_bytes, max_width=800, quality=70))
    assert img.size == (40, 20)


def test_compress_flattens_alpha(make_png):
    img = _decode(images.compress(make_png(10, 10, "RGBA"), max_width=800, quality=70))
    assert img.mode == "RGB"


def test_compress_rejects_garbage(caplog):
    with caplog.at_level(logging.WARNING, logger="frontend.services.images"):
        with pytest.raises(ImageReadError) as exc:
            images.compress(b"definitely not an image", max_width=800, quality=70)

    assert str(exc.value) == images.PROCESS_FAILED
    assert "BytesIO" not in str(exc.value)
    assert "0x" not in str(exc.value)
    assert "cannot identify image file" in caplog.text


def test_ensure_within():
    assert images.ensure_within("data:x", 10) == "data:x"
    with pytest.raises(ImageTooLargeError) as exc:
        images.ensure_within("x" * 11, 10)
    assert exc.value.size == 11
    assert exc.value.limit == 10
    assert "too large" in str(exc.value)


def test_read_missing_file(tmp_path):
    with pytest.raises(ImageReadError) as exc:
        images.read_bytes(PendingImage(path=tmp_path / "missing.png"))

    assert str(exc.value) == images.READ_FAILED
    assert str(tmp_path) not in str(exc.value)


def test_pending_image_needs_one_source(png_bytes, tmp_path):
    with pytest.raises(ValueError):
        PendingImage()
    with pytest.raises(ValueError):
        PendingImage(path=tmp_path / "a.png", data=png_bytes)


async def test_encode_from_path_uses_file_type(tmp_path, png_bytes):
    path = tmp_path / "avatar.png"
    path.write_bytes(png_bytes)

    data_url = await images.encode(PendingImage(path=path))

    assert data_url.startswith("data:image/png;base64,")
    assert _decode(data_url).size == (40, 20)


async def test_encode_sniffs_raw_bytes(png_bytes):
    data_url = await images.encode(PendingImage(data=png_bytes))
    assert data_url.startswith("data:image/png;base64,")


async def test_encode_compressed(wide_png_bytes):
    data_url = await images.encode_compressed(PendingImage(data=wide_png_bytes), max_width=400, quality=50)
    assert _decode(data_url).size == (400, 200)


def test_editor_tiles_use_pending_image_preview(tmp_path, png_bytes):
    picked = PendingImage(path=tmp_path / "cat.png")
    pasted = PendingImage(data=png_bytes)
    drafts = ImageDraftSet()

    drafts.add([picked, pasted])

    assert [p.url for p in drafts.previews] == [str(tmp_path / "cat.png"), f"<{len(png_bytes)} bytes>"]
    assert drafts.new_images == [picked, pasted]
