"""
Blog State - Blog Reducer

Pure function: (state, action) → state
No side effects. No IO. Deterministic.

Blogs and comments are kept as plain dicts (model_dump output of the
frontend models). Local list maintenance never raises: a blog or comment
that is not present locally is a silent no-op, because the backend is the
source of truth and the local copy may be stale.
"""

from __future__ import annotations

import copy
from typing import Any

from state.types import (
    ADD_BLOG,
    ADD_COMMENT,
    BLOG_CLEAR_ERROR,
    BLOG_CLEAR_SUCCESS,
    CLEAR_SINGLE_BLOG,
    DELETE_BLOG,
    DELETE_COMMENT,
    EDIT_COMMENT,
    FETCH_ALL_BLOGS,
    FETCH_BLOGS_BY_AUTHOR,
    FETCH_SINGLE_BLOG,
    FULFILLED,
    PENDING,
    REJECTED,
    RESET_BLOG_STATE,
    UPDATE_BLOG,
    Action,
)

ADD_BLOG_SUCCESS = "Blog Added Successfully"
UPDATE_BLOG_SUCCESS = "Blog updated successfully!"
DELETE_BLOG_SUCCESS = "Blog deleted successfully!"
ADD_COMMENT_SUCCESS = "Comment added!"
EDIT_COMMENT_SUCCESS = "Comment updated!"
DELETE_COMMENT_SUCCESS = "Comment deleted!"

DEFAULT_PER_PAGE = 9

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def empty_blog_state(per_page: int = DEFAULT_PER_PAGE) -> dict[str, Any]:
    """The blog slice before any fetch."""
    return {
        "blogs": [],
        "single_blog": None,
        "total": 0,
        "current_page": 1,
        "per_page": per_page,
        "loading": False,
        "loading_single_blog": False,
        "comment_loading": False,
        "error": None,
        "success": None,
    }


def reduce_blog(state: dict[str, Any], action: Action) -> dict[str, Any]:
    """Apply one action to the blog slice and return the next state."""
    handler = _HANDLERS.get(action.type)
    if handler is None:
        return state
    return handler(state, action)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _arg(action: Action) -> dict[str, Any]:
    arg = action.meta.get("arg")
    return arg if isinstance(arg, dict) else {}


def _blogs_with_id(snap: dict, blog_id: Any) -> list[dict]:
    """Every local copy of a blog: list entries plus the focused single blog."""
    found = [b for b in snap["blogs"] if b.get("id") == blog_id]
    single = snap["single_blog"]
    if single is not None and single.get("id") == blog_id:
        found.append(single)
    return found


def _merge_blog(blog: dict, update: dict, removed_image_ids: list[Any]) -> None:
    """Merge an update payload into a local blog in place."""
    for key, value in update.items():
        if key in ("images", "comments"):
            continue
        blog[key] = value

    removed = set(removed_image_ids)
    images = [img for img in blog.get("images", []) if img.get("id") not in removed]
    images.extend(update.get("images", []))
    blog["images"] = images


# ---------------------------------------------------------------------------
# List operations
# ---------------------------------------------------------------------------


def _on_list_pending(state: dict, action: Action) -> dict:
    snap = copy.deepcopy(state)
    snap["loading"] = True
    snap["error"] = None
    return snap


def _on_list_rejected(state: dict, action: Action) -> dict:
    snap = copy.deepcopy(state)
    snap["loading"] = False
    snap["error"] = action.payload
    return snap


def _on_fetch_list_fulfilled(state: dict, action: Action) -> dict:
    snap = copy.deepcopy(state)
    arg = _arg(action)
    snap["loading"] = False
    snap["blogs"] = action.payload["data"]
    snap["total"] = action.payload["total"]
    snap["current_page"] = arg.get("page", snap["current_page"])
    snap["per_page"] = arg.get("per_page", snap["per_page"])
    return snap


def _on_add_blog_fulfilled(state: dict, action: Action) -> dict:
    snap = copy.deepcopy(state)
    snap["loading"] = False
    snap["blogs"].insert(0, action.payload)
    snap["success"] = ADD_BLOG_SUCCESS
    return snap


def _on_update_blog_fulfilled(state: dict, action: Action) -> dict:
    snap = copy.deepcopy(state)
    snap["loading"] = False
    snap["success"] = UPDATE_BLOG_SUCCESS
    removed_image_ids = _arg(action).get("removed_image_ids", [])
    for blog in _blogs_with_id(snap, action.payload["id"]):
        _merge_blog(blog, action.payload, removed_image_ids)
    return snap


def _on_delete_blog_fulfilled(state: dict, action: Action) -> dict:
    snap = copy.deepcopy(state)
    blog_id = action.payload
    snap["loading"] = False
    snap["success"] = DELETE_BLOG_SUCCESS
    snap["blogs"] = [b for b in snap["blogs"] if b.get("id") != blog_id]
    if snap["single_blog"] is not None and snap["single_blog"].get("id") == blog_id:
        snap["single_blog"] = None
    return snap


# ---------------------------------------------------------------------------
# Single blog
# ---------------------------------------------------------------------------


def _on_single_pending(state: dict, action: Action) -> dict:
    snap = copy.deepcopy(state)
    snap["loading_single_blog"] = True
    snap["error"] = None
    return snap


def _on_single_fulfilled(state: dict, action: Action) -> dict:
    snap = copy.deepcopy(state)
    snap["loading_single_blog"] = False
    snap["single_blog"] = action.payload
    return snap


def _on_single_rejected(state: dict, action: Action) -> dict:
    snap = copy.deepcopy(state)
    snap["loading_single_blog"] = False
    snap["error"] = action.payload
    return snap


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------


def _on_comment_pending(state: dict, action: Action) -> dict:
    snap = copy.deepcopy(state)
    snap["comment_loading"] = True
    snap["error"] = None
    return snap


def _on_comment_rejected(state: dict, action: Action) -> dict:
    snap = copy.deepcopy(state)
    snap["comment_loading"] = False
    snap["error"] = action.payload
    return snap


def _on_add_comment_fulfilled(state: dict, action: Action) -> dict:
    snap = copy.deepcopy(state)
    comment = action.payload
    snap["comment_loading"] = False
    snap["success"] = ADD_COMMENT_SUCCESS
    for blog in _blogs_with_id(snap, comment["blog_id"]):
        blog.setdefault("comments", []).append(copy.deepcopy(comment))
    return snap


def _on_edit_comment_fulfilled(state: dict, action: Action) -> dict:
    snap = copy.deepcopy(state)
    comment = action.payload
    snap["comment_loading"] = False
    snap["success"] = EDIT_COMMENT_SUCCESS
    for blog in _blogs_with_id(snap, comment["blog_id"]):
        for existing in blog.get("comments", []):
            if existing.get("id") == comment["id"]:
                existing.update(copy.deepcopy(comment))
    return snap


def _on_delete_comment_fulfilled(state: dict, action: Action) -> dict:
    snap = copy.deepcopy(state)
    comment_id = action.payload["comment_id"]
    snap["comment_loading"] = False
    snap["success"] = DELETE_COMMENT_SUCCESS
    for blog in _blogs_with_id(snap, action.payload["blog_id"]):
        blog["comments"] = [c for c in blog.get("comments", []) if c.get("id") != comment_id]
    return snap


# ---------------------------------------------------------------------------
# Synchronous handlers
# ---------------------------------------------------------------------------


def _clear_field(name: str):
    def handler(state: dict, action: Action) -> dict:
        if state[name] is None:
            return state
        snap = copy.deepcopy(state)
        snap[name] = None
        return snap

    return handler


def _reset_blog_state(state: dict, action: Action) -> dict:
    snap = copy.deepcopy(state)
    snap["single_blog"] = None
    snap["loading_single_blog"] = False
    snap["error"] = None
    snap["success"] = None
    return snap


# ---------------------------------------------------------------------------
# Handler registry
# ---------------------------------------------------------------------------

_HANDLERS: dict[str, Any] = {
    f"{ADD_BLOG}/{PENDING}": _on_list_pending,
    f"{ADD_BLOG}/{FULFILLED}": _on_add_blog_fulfilled,
    f"{ADD_BLOG}/{REJECTED}": _on_list_rejected,
    f"{UPDATE_BLOG}/{PENDING}": _on_list_pending,
    f"{UPDATE_BLOG}/{FULFILLED}": _on_update_blog_fulfilled,
    f"{UPDATE_BLOG}/{REJECTED}": _on_list_rejected,
    f"{DELETE_BLOG}/{PENDING}": _on_list_pending,
    f"{DELETE_BLOG}/{FULFILLED}": _on_delete_blog_fulfilled,
    f"{DELETE_BLOG}/{REJECTED}": _on_list_rejected,
    f"{FETCH_ALL_BLOGS}/{PENDING}": _on_list_pending,
    f"{FETCH_ALL_BLOGS}/{FULFILLED}": _on_fetch_list_fulfilled,
    f"{FETCH_ALL_BLOGS}/{REJECTED}": _on_list_rejected,
    f"{FETCH_BLOGS_BY_AUTHOR}/{PENDING}": _on_list_pending,
    f"{FETCH_BLOGS_BY_AUTHOR}/{FULFILLED}": _on_fetch_list_fulfilled,
    f"{FETCH_BLOGS_BY_AUTHOR}/{REJECTED}": _on_list_rejected,
    f"{FETCH_SINGLE_BLOG}/{PENDING}": _on_single_pending,
    f"{FETCH_SINGLE_BLOG}/{FULFILLED}": _on_single_fulfilled,
    f"{FETCH_SINGLE_BLOG}/{REJECTED}": _on_single_rejected,
    f"{ADD_COMMENT}/{PENDING}": _on_comment_pending,
    f"{ADD_COMMENT}/{FULFILLED}": _on_add_comment_fulfilled,
    f"{ADD_COMMENT}/{REJECTED}": _on_comment_rejected,
    f"{EDIT_COMMENT}/{PENDING}": _on_comment_pending,
    f"{EDIT_COMMENT}/{FULFILLED}": _on_edit_comment_fulfilled,
    f"{EDIT_COMMENT}/{REJECTED}": _on_comment_rejected,
    f"{DELETE_COMMENT}/{PENDING}": _on_comment_pending,
    f"{DELETE_COMMENT}/{FULFILLED}": _on_delete_comment_fulfilled,
    f"{DELETE_COMMENT}/{REJECTED}": _on_comment_rejected,
    BLOG_CLEAR_ERROR: _clear_field("error"),
    BLOG_CLEAR_SUCCESS: _clear_field("success"),
    CLEAR_SINGLE_BLOG: _clear_field("single_blog"),
    RESET_BLOG_STATE: _reset_blog_state,
}
