"""
Repository layer for the blog client.

All table names and column mappings live here and ONLY here. No gateway
table calls outside this module.
"""

from frontend.repos.blog_repo import BlogRepo
from frontend.repos.comment_repo import CommentRepo
from frontend.repos.image_repo import ImageRepo
from frontend.repos.user_repo import UserRepo

__all__ = [
    "UserRepo",
    "BlogRepo",
    "ImageRepo",
    "CommentRepo",
]
