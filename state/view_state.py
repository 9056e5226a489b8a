"""
Blog State - Transient View State

Editing state scoped to the rendering of one item (a post editor, one
comment thread). None of this is ever dispatched to the Store: it lives and
dies with the view that owns it.

ImageDraftSet   - image list of the post editor: persisted images plus
                  pending uploads, and the ids of persisted images removed.
CommentDraft    - text/file of a new comment before it is submitted.
CommentEditor   - per-thread edit mode: which comment is being edited, its
                  buffers, the tri-state image choice, and the open menu.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

MAX_POST_IMAGES = 10


def _preview_handle(file: Any) -> str:
    """A pending image's own preview handle, else its string form."""
    return getattr(file, "preview", None) or str(file)


@dataclass
class ImagePreview:
    """One tile in the editor grid."""

    url: str
    is_new: bool
    image_id: str | None = None


class ImageDraftSet:
    """Image list of the post editor."""

    def __init__(self, existing: list[dict[str, Any]] | None = None, max_images: int = MAX_POST_IMAGES):
        self.max_images = max_images
        self.previews: list[ImagePreview] = [
            ImagePreview(url=img["image_path"], is_new=False, image_id=img.get("id"))
            for img in existing or []
        ]
        self.new_images: list[Any] = []
        self.removed_image_ids: list[str] = []

    @property
    def remaining(self) -> int:
        return max(self.max_images - len(self.previews), 0)

    def add(self, files: list[Any], preview_of=_preview_handle) -> int:
        """
        Queue pending uploads, truncated to the remaining capacity.

        Args:
            files: Pending images in selection order
            preview_of: Builds the preview handle for a file

        Returns:
            Number of files actually queued
        """
        accepted = files[: self.remaining]
        self.new_images.extend(accepted)
        self.previews.extend(ImagePreview(url=preview_of(f), is_new=True) for f in accepted)
        return len(accepted)

    def remove(self, index: int) -> None:
        """Drop the tile at index. Persisted images are remembered for deletion."""
        if index < 0 or index >= len(self.previews):
            return
        preview = self.previews[index]
        if not preview.is_new and preview.image_id:
            self.removed_image_ids.append(preview.image_id)
        elif preview.is_new:
            # Position among new images only
            new_index = sum(1 for p in self.previews[:index] if p.is_new)
            del self.new_images[new_index]
        del self.previews[index]

    def clear(self) -> None:
        self.previews = []
        self.new_images = []
        self.removed_image_ids = []

    def update_arg(self) -> dict[str, Any]:
        """The image part of an update-blog argument."""
        return {
            "new_images": list(self.new_images),
            "removed_image_ids": list(self.removed_image_ids),
        }


@dataclass
class CommentDraft:
    text: str = ""
    file: Any = None

    @property
    def is_empty(self) -> bool:
        return not self.text.strip() and self.file is None

    def reset(self) -> None:
        self.text = ""
        self.file = None


@dataclass
class CommentEditor:
    """
    Edit mode for the comments of one blog.

    Image choice is tri-state: untouched (no file, remove_image False),
    replace (file set), remove (remove_image True). Setting one clears the
    other.
    """

    editing_id: str | None = None
    text: str = ""
    file: Any = None
    remove_image: bool = False
    open_menu_id: str | None = None

    def toggle_menu(self, comment_id: str) -> None:
        self.open_menu_id = None if self.open_menu_id == comment_id else comment_id

    def begin(self, comment: dict[str, Any]) -> None:
        self.editing_id = comment["id"]
        self.text = comment.get("content") or ""
        self.file = None
        self.remove_image = False
        self.open_menu_id = None

    def cancel(self) -> None:
        self.editing_id = None
        self.text = ""
        self.file = None
        self.remove_image = False

    def replace_image(self, file: Any) -> None:
        self.file = file
        self.remove_image = False

    def drop_image(self) -> None:
        self.file = None
        self.remove_image = True

    def edit_arg(self, user_id: str) -> dict[str, Any]:
        """Argument for the edit-comment operation from the current buffers."""
        if self.editing_id is None:
            raise ValueError("no comment is being edited")
        return {
            "comment_id": self.editing_id,
            "user_id": user_id,
            "content": self.text,
            "file": self.file,
            "remove_image": self.remove_image,
        }
