"""
Composition root for the blog client.

BlogApp owns the store, the gateway and local storage, and hands them to
the thunks through one ThunkContext. Views hold a BlogApp, read state from
`app.store` and call its async methods.

Usage:
    app = BlogApp()
    await app.start()
    await app.fetch_all_blogs(page=1)
    blogs = app.store.blog["blogs"]
    await app.close()
"""

from __future__ import annotations

import logging
from typing import Any

from frontend.config import Settings
from frontend.gateway import Gateway, MemoryGateway
from frontend.gateway.http import HttpGateway
from frontend.local_storage import LocalStorage
from frontend.repos.comment_repo import DETAILS_VIEW
from frontend.thunks import (
    ThunkContext,
    add_blog,
    add_comment,
    delete_blog,
    delete_comment,
    edit_comment,
    fetch_all_blogs,
    fetch_blogs_by_author,
    fetch_single_blog,
    login_user,
    logout_user,
    register_user,
    restore_session,
    update_blog,
)
from state.actions import clear_pending_registration, set_pending_registration
from state.store import Store, initial_state
from state.types import Action

logger = logging.getLogger(__name__)

PRIMARY_KEYS = {
    "tbluser": "userID",
    "tblBlog": "id",
    "tblimage": "imageID",
    "tblcomment": "commentID",
}


def build_comment_details(gateway: MemoryGateway) -> list[dict[str, Any]]:
    """The comment view for the in-memory backend: comments plus author fields."""
    users = {str(u.get("userID")): u for u in gateway.tables.get("tbluser", [])}
    rows = []
    for comment in gateway.tables.get("tblcomment", []):
        author = users.get(str(comment.get("userID")), {})
        rows.append({**comment, "authorName": author.get("name"), "authorAvatar": author.get("image")})
    return rows


def memory_gateway() -> MemoryGateway:
    """An in-memory backend with the blog tables and the comment view."""
    gateway = MemoryGateway(primary_keys=dict(PRIMARY_KEYS))
    gateway.register_view(DETAILS_VIEW, build_comment_details)
    return gateway


class BlogApp:
    """Wires settings, gateway, local storage and store together."""

    def __init__(
        self,
        settings: Settings | None = None,
        gateway: Gateway | None = None,
        local_storage: LocalStorage | None = None,
    ):
        self.settings = settings or Settings()
        self.local_storage = local_storage or LocalStorage(self.settings.STORAGE_PATH)
        self.gateway = gateway or HttpGateway(self.settings, local_storage=self.local_storage)
        self.store = Store(initial_state(self.settings.DEFAULT_PER_PAGE))
        self.ctx = ThunkContext(
            gateway=self.gateway,
            store=self.store,
            settings=self.settings,
        )

        stashed = self.local_storage.get_pending_registration()
        if stashed is not None:
            self.store.dispatch(set_pending_registration(stashed["name"], stashed["email"]))
        self._unsubscribe = self.store.subscribe(self._persist_pending_registration)

    def _persist_pending_registration(self, state: dict[str, Any], action: Action) -> None:
        """Mirror auth.pending_registration into durable storage."""
        pending = state["auth"]["pending_registration"]
        if pending == self.local_storage.get_pending_registration():
            return
        try:
            if pending is None:
                self.local_storage.clear_pending_registration()
            else:
                self.local_storage.set_pending_registration(pending["name"], pending["email"])
        except OSError as e:
            logger.warning("Could not persist pending registration to %s: %s", self.local_storage.path, e)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> dict[str, Any] | None:
        """Restore a previous session, if the backend still holds one."""
        return await restore_session(self.ctx)

    async def close(self) -> None:
        self._unsubscribe()
        await self.gateway.close()

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    def stash_registration(self, name: str, email: str) -> None:
        self.store.dispatch(set_pending_registration(name, email))

    def cancel_registration(self) -> None:
        self.store.dispatch(clear_pending_registration())

    async def register(self, name: str, email: str, password: str, image: Any = None) -> Action:
        return await register_user(self.ctx, {"name": name, "email": email, "password": password, "image": image})

    async def login(self, email: str, password: str) -> Action:
        return await login_user(self.ctx, {"email": email, "password": password})

    async def logout(self) -> Action:
        return await logout_user(self.ctx)

    # ------------------------------------------------------------------
    # Blogs
    # ------------------------------------------------------------------

    async def fetch_all_blogs(self, page: int = 1, per_page: int | None = None) -> Action:
        return await fetch_all_blogs(
            self.ctx, {"page": page, "per_page": per_page or self.store.blog["per_page"]}
        )

    async def fetch_blogs_by_author(self, author_id: str, page: int = 1, per_page: int | None = None) -> Action:
        return await fetch_blogs_by_author(
            self.ctx,
            {"author_id": author_id, "page": page, "per_page": per_page or self.store.blog["per_page"]},
        )

    async def fetch_single_blog(self, blog_id: str) -> Action:
        return await fetch_single_blog(self.ctx, blog_id)

    async def add_blog(self, title: str, content: str, images: list[Any] | None = None) -> Action:
        """Post as the logged-in user."""
        user = self.store.auth["user"]
        author_id = user["id"] if user else ""
        return await add_blog(
            self.ctx, {"title": title, "content": content, "author_id": author_id, "images": images or []}
        )

    async def update_blog(self, arg: dict[str, Any]) -> Action:
        return await update_blog(self.ctx, arg)

    async def delete_blog(self, blog_id: str) -> Action:
        return await delete_blog(self.ctx, blog_id)

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    async def add_comment(self, arg: dict[str, Any]) -> Action:
        return await add_comment(self.ctx, arg)

    async def edit_comment(self, arg: dict[str, Any]) -> Action:
        return await edit_comment(self.ctx, arg)

    async def delete_comment(self, arg: dict[str, Any]) -> Action:
        return await delete_comment(self.ctx, arg)
