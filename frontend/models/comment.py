"""Comment models."""

from __future__ import annotations

from pydantic import BaseModel

from frontend.models.image import PendingImage


class Comment(BaseModel):
    """A comment as read through the joined view, with author display fields."""

    id: str
    blog_id: str
    user_id: str
    content: str = ""
    image: str | None = None  # inline data URL
    created_at: str | None = None
    author_name: str | None = None
    author_avatar: str | None = None


class AddCommentRequest(BaseModel):
    blog_id: str
    user_id: str
    content: str = ""
    file: PendingImage | None = None


class EditCommentRequest(BaseModel):
    """
    Image handling is tri-state: `file` replaces the image, `remove_image`
    clears it, neither leaves it untouched. Setting both is rejected.
    """

    comment_id: str
    user_id: str
    content: str = ""
    file: PendingImage | None = None
    remove_image: bool = False


class DeleteCommentRequest(BaseModel):
    comment_id: str
    user_id: str
    blog_id: str  # only used to target local state
