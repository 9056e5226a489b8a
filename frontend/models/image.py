"""Image models: pending uploads and persisted image rows."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, model_validator


class PendingImage(BaseModel):
    """
    An image picked on the client but not yet uploaded.
    Exactly one of `path` or `data` is set. Encoded only at write time.
    """

    path: Path | None = None
    data: bytes | None = None
    alt_text: str = ""

    @model_validator(mode="after")
    def _one_source(self) -> PendingImage:
        if (self.path is None) == (self.data is None):
            raise ValueError("PendingImage needs exactly one of path or data")
        return self

    @property
    def preview(self) -> str:
        """Local preview handle shown until the upload is durable."""
        if self.path is not None:
            return str(self.path)
        return f"<{len(self.data or b'')} bytes>"


class BlogImage(BaseModel):
    """Row of the image table. `id` is None until persisted."""

    id: str | None = None
    blog_id: str
    image_path: str  # inline data URL
    alt_text: str = ""
    sort_order: int = 0
