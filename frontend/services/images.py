"""
Client-side image encoding.

Images travel to the backend as inline data URLs. Post and comment images
are downsized first: decode, scale to a bounded width preserving aspect
ratio, re-encode as JPEG at a fixed quality. Profile avatars are sent as
picked. Decoding and file reads run in a worker thread so the event loop
keeps serving other operations.
"""

from __future__ import annotations

import asyncio
import base64
import io
import logging
import mimetypes

from PIL import Image, UnidentifiedImageError

from frontend.models.image import PendingImage

logger = logging.getLogger(__name__)

READ_FAILED = "Failed to read image file"
PROCESS_FAILED = "Failed to process image: unsupported or corrupt file"


class ImageError(Exception):
    """Base exception for image processing errors."""

    pass


class ImageReadError(ImageError):
    """Raised when the picked file cannot be read or decoded."""

    pass


class ImageTooLargeError(ImageError):
    """Raised when an encoded image exceeds the payload ceiling."""

    def __init__(self, size: int, limit: int):
        super().__init__(f"Image is too large ({size} characters, max {limit}). Please choose a smaller image.")
        self.size = size
        self.limit = limit


def read_bytes(image: PendingImage) -> bytes:
    if image.data is not None:
        return image.data
    try:
        return image.path.read_bytes()
    except OSError as e:
        logger.warning("Could not read image %s: %s", image.path, e)
        raise ImageReadError(READ_FAILED) from e


def _mime_type(image: PendingImage, content: bytes) -> str:
    if image.path is not None:
        guessed, _ = mimetypes.guess_type(str(image.path))
        if guessed:
            return guessed
    try:
        with Image.open(io.BytesIO(content)) as img:
            return Image.MIME.get(img.format, "application/octet-stream")
    except (UnidentifiedImageError, OSError):
        return "application/octet-stream"


def to_data_url(content: bytes, mime_type: str) -> str:
    encoded = base64.b64encode(content).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def compress(content: bytes, max_width: int, quality: int) -> str:
    """
    Downsize and re-encode image bytes as a JPEG data URL.

    Args:
        content: Raw image file bytes (any format Pillow decodes)
        max_width: Width bound in pixels; narrower images keep their size
        quality: JPEG quality, 1-95

    Returns:
        "data:image/jpeg;base64,..." string
    """
    try:
        with Image.open(io.BytesIO(content)) as img:
            img.load()
            if img.mode != "RGB":
                img = img.convert("RGB")
            if img.width > max_width:
                height = max(1, round(img.height * max_width / img.width))
                img = img.resize((max_width, height), Image.Resampling.LANCZOS)
            buffer = io.BytesIO()
            img.save(buffer, format="JPEG", quality=quality, optimize=True)
    except (UnidentifiedImageError, OSError) as e:
        logger.warning("Could not decode image (%d bytes): %s", len(content), e)
        raise ImageReadError(PROCESS_FAILED) from e
    return to_data_url(buffer.getvalue(), "image/jpeg")


def ensure_within(data_url: str, max_chars: int) -> str:
    if len(data_url) > max_chars:
        raise ImageTooLargeError(len(data_url), max_chars)
    return data_url


async def encode(image: PendingImage) -> str:
    """Inline the image as picked, without resizing."""
    content = await asyncio.to_thread(read_bytes, image)
    return to_data_url(content, _mime_type(image, content))


async def encode_compressed(image: PendingImage, max_width: int, quality: int) -> str:
    """Read, downsize and re-encode a pending image."""
    content = await asyncio.to_thread(read_bytes, image)
    return await asyncio.to_thread(compress, content, max_width, quality)
