"""
Blog client configuration - all environment variables in one place.

Read from environment when Settings() is constructed. Never hardcode secrets.
"""

from __future__ import annotations

import os
from pathlib import Path

from state.blog_reducer import DEFAULT_PER_PAGE
from state.view_state import MAX_POST_IMAGES

# Legacy rule: registration only accepted one mail provider.
DEFAULT_EMAIL_PATTERN = r"^[A-Za-z0-9._%+-]+@gmail\.com$"


class Settings:
    """Client settings from environment variables."""

    def __init__(self) -> None:
        # Hosted backend
        self.API_URL: str = os.environ.get("BLOG_API_URL", "").rstrip("/")
        self.API_KEY: str = os.environ.get("BLOG_API_KEY", "")
        self.REQUEST_TIMEOUT: float = float(os.environ.get("BLOG_REQUEST_TIMEOUT", "30.0"))

        # Durable local storage (pending registration, session token)
        self.STORAGE_PATH: Path = Path(
            os.environ.get("BLOG_STORAGE_PATH", str(Path.home() / ".blogapp" / "storage.json"))
        )

        # Images
        self.IMAGE_MAX_WIDTH: int = int(os.environ.get("IMAGE_MAX_WIDTH", "800"))
        self.IMAGE_QUALITY: float = float(os.environ.get("IMAGE_QUALITY", "0.7"))
        self.COMMENT_IMAGE_MAX_CHARS: int = int(os.environ.get("COMMENT_IMAGE_MAX_CHARS", "900000"))
        self.MAX_POST_IMAGES: int = int(os.environ.get("MAX_POST_IMAGES", str(MAX_POST_IMAGES)))

        # Listing
        self.DEFAULT_PER_PAGE: int = int(os.environ.get("DEFAULT_PER_PAGE", str(DEFAULT_PER_PAGE)))

        # Registration
        self.EMAIL_PATTERN: str = os.environ.get("EMAIL_PATTERN", DEFAULT_EMAIL_PATTERN)

    @property
    def image_quality_percent(self) -> int:
        """Pillow expects JPEG quality on a 1-95 scale."""
        return max(1, min(95, round(self.IMAGE_QUALITY * 100)))


settings = Settings()
