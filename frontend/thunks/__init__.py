"""
Async operations dispatched against the store.

Every thunk takes a ThunkContext and one argument, and resolves to the
terminal Action it dispatched.
"""

from frontend.thunks.auth import login_user, logout_user, register_user, restore_session
from frontend.thunks.base import Rejected, ThunkContext, create_async_thunk
from frontend.thunks.blog import (
    add_blog,
    delete_blog,
    fetch_all_blogs,
    fetch_blogs_by_author,
    fetch_single_blog,
    total_pages,
    update_blog,
)
from frontend.thunks.comment import add_comment, delete_comment, edit_comment

__all__ = [
    "Rejected",
    "ThunkContext",
    "add_blog",
    "add_comment",
    "create_async_thunk",
    "delete_blog",
    "delete_comment",
    "edit_comment",
    "fetch_all_blogs",
    "fetch_blogs_by_author",
    "fetch_single_blog",
    "login_user",
    "logout_user",
    "register_user",
    "restore_session",
    "total_pages",
    "update_blog",
]
