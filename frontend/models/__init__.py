"""Pydantic models for remote entities and pipeline inputs."""

from frontend.models.blog import AddBlogRequest, Blog, FetchBlogsRequest, UpdateBlogRequest
from frontend.models.comment import AddCommentRequest, Comment, DeleteCommentRequest, EditCommentRequest
from frontend.models.image import BlogImage, PendingImage
from frontend.models.user import LoginRequest, RegisterRequest, User

__all__ = [
    "AddBlogRequest",
    "AddCommentRequest",
    "Blog",
    "BlogImage",
    "Comment",
    "DeleteCommentRequest",
    "EditCommentRequest",
    "FetchBlogsRequest",
    "LoginRequest",
    "PendingImage",
    "RegisterRequest",
    "UpdateBlogRequest",
    "User",
]
