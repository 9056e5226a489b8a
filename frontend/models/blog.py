"""Blog post models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from frontend.models.comment import Comment
from frontend.models.image import BlogImage, PendingImage


class Blog(BaseModel):
    """A post hydrated with its images, comments and author display fields."""

    id: str
    title: str
    content: str
    author_id: str
    created_at: str | None = None
    images: list[BlogImage] = Field(default_factory=list)
    comments: list[Comment] = Field(default_factory=list)
    author_name: str | None = None
    author_avatar: str | None = None


class AddBlogRequest(BaseModel):
    title: str = ""
    content: str = ""
    author_id: str
    images: list[PendingImage] = Field(default_factory=list)


class UpdateBlogRequest(BaseModel):
    blog_id: str
    title: str = ""
    content: str = ""
    new_images: list[PendingImage] = Field(default_factory=list)
    removed_image_ids: list[str] = Field(default_factory=list)


class FetchBlogsRequest(BaseModel):
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=9, ge=1)
    author_id: str | None = None
