"""
Blog State - Shared Types

Data classes used across actions, reducers, the store and the thunk pipeline.
These are the contracts that bind the state layer together.

Every async operation produces actions named "<slice>/<operation>/<outcome>"
where outcome is one of pending, fulfilled, rejected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

# ---------------------------------------------------------------------------
# Outcome suffixes
# ---------------------------------------------------------------------------

PENDING = "pending"
FULFILLED = "fulfilled"
REJECTED = "rejected"

OUTCOMES: set[str] = {PENDING, FULFILLED, REJECTED}


# ---------------------------------------------------------------------------
# Operation type prefixes
# ---------------------------------------------------------------------------

# Auth slice
REGISTER_USER = "auth/registerUser"
LOGIN_USER = "auth/loginUser"
LOGOUT_USER = "auth/logoutUser"
SET_USER = "auth/setUser"
LOGOUT = "auth/logout"
AUTH_CLEAR_ERROR = "auth/clearError"
AUTH_CLEAR_SUCCESS = "auth/clearSuccess"
SET_RESTORING = "auth/setRestoring"
SET_PENDING_REGISTRATION = "auth/setPendingRegistration"
CLEAR_PENDING_REGISTRATION = "auth/clearPendingRegistration"

# Blog slice
ADD_BLOG = "blog/addBlog"
UPDATE_BLOG = "blog/updateBlog"
DELETE_BLOG = "blog/deleteBlog"
FETCH_ALL_BLOGS = "blog/fetchAllBlogs"
FETCH_BLOGS_BY_AUTHOR = "blog/fetchByAuthor"
FETCH_SINGLE_BLOG = "blog/fetchSingleBlog"
ADD_COMMENT = "blog/addComment"
EDIT_COMMENT = "blog/editComment"
DELETE_COMMENT = "blog/deleteComment"
BLOG_CLEAR_ERROR = "blog/clearError"
BLOG_CLEAR_SUCCESS = "blog/clearSuccess"
CLEAR_SINGLE_BLOG = "blog/clearSingleBlog"
RESET_BLOG_STATE = "blog/resetBlogState"


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class Action:
    """
    A state transition request.

    Thunk outcomes carry the operation prefix plus an outcome suffix,
    e.g. "blog/addBlog/fulfilled". On a rejected outcome, `payload` is the
    reason string and `error` is True. `meta` carries the thunk argument
    and request id so reducers can target local state on pending.
    """

    type: str
    payload: Any = None
    error: bool = False
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def prefix(self) -> str:
        """Operation prefix without the outcome suffix."""
        head, _, tail = self.type.rpartition("/")
        if tail in OUTCOMES:
            return head
        return self.type

    @property
    def outcome(self) -> str | None:
        """pending / fulfilled / rejected, or None for a synchronous action."""
        tail = self.type.rpartition("/")[2]
        return tail if tail in OUTCOMES else None

    @property
    def is_fulfilled(self) -> bool:
        return self.outcome == FULFILLED

    @property
    def is_rejected(self) -> bool:
        return self.outcome == REJECTED

    def unwrap(self) -> Any:
        """
        Return the fulfilled payload, or raise ActionRejected with the reason.
        Lets a caller opt back into exception flow after dispatch.
        """
        if self.is_rejected:
            raise ActionRejected(self.type, self.payload)
        return self.payload

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"type": self.type, "payload": self.payload}
        if self.error:
            d["error"] = True
        if self.meta:
            d["meta"] = self.meta
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Action:
        return cls(
            type=d["type"],
            payload=d.get("payload"),
            error=d.get("error", False),
            meta=d.get("meta", {}),
        )


class ActionRejected(Exception):
    """Raised by Action.unwrap() on a rejected outcome."""

    def __init__(self, action_type: str, reason: str):
        super().__init__(reason)
        self.action_type = action_type
        self.reason = reason


def now_iso() -> str:
    """Current UTC time as ISO 8601 string."""
    return datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
