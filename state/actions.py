"""
Blog State - Action Construction

Factory functions for creating well-formed actions.
Used by the thunk pipeline to report outcomes, by callers for synchronous
mutations, and by tests to build actions concisely.
"""

from __future__ import annotations

import uuid
from typing import Any

from state.types import (
    AUTH_CLEAR_ERROR,
    AUTH_CLEAR_SUCCESS,
    BLOG_CLEAR_ERROR,
    BLOG_CLEAR_SUCCESS,
    CLEAR_PENDING_REGISTRATION,
    CLEAR_SINGLE_BLOG,
    FULFILLED,
    LOGOUT,
    PENDING,
    REJECTED,
    RESET_BLOG_STATE,
    SET_PENDING_REGISTRATION,
    SET_RESTORING,
    SET_USER,
    Action,
)


def _meta(arg: Any, request_id: str | None) -> dict[str, Any]:
    return {"arg": arg, "request_id": request_id or uuid.uuid4().hex}


# ---------------------------------------------------------------------------
# Async outcomes
# ---------------------------------------------------------------------------


def pending(prefix: str, arg: Any = None, *, request_id: str | None = None) -> Action:
    """Dispatched before any side effect of an operation."""
    return Action(type=f"{prefix}/{PENDING}", meta=_meta(arg, request_id))


def fulfilled(
    prefix: str,
    payload: Any,
    arg: Any = None,
    *,
    request_id: str | None = None,
) -> Action:
    return Action(type=f"{prefix}/{FULFILLED}", payload=payload, meta=_meta(arg, request_id))


def rejected(
    prefix: str,
    reason: str,
    arg: Any = None,
    *,
    request_id: str | None = None,
) -> Action:
    """The payload of a rejected action is always the reason string."""
    return Action(
        type=f"{prefix}/{REJECTED}",
        payload=str(reason),
        error=True,
        meta=_meta(arg, request_id),
    )


# ---------------------------------------------------------------------------
# Synchronous auth mutations
# ---------------------------------------------------------------------------


def set_user(user: dict[str, Any] | None) -> Action:
    """Used after out-of-band session recovery."""
    return Action(type=SET_USER, payload=user)


def logout() -> Action:
    return Action(type=LOGOUT)


def clear_auth_error() -> Action:
    return Action(type=AUTH_CLEAR_ERROR)


def clear_auth_success() -> Action:
    return Action(type=AUTH_CLEAR_SUCCESS)


def set_restoring(value: bool) -> Action:
    return Action(type=SET_RESTORING, payload=value)


def set_pending_registration(name: str, email: str) -> Action:
    """Stash a registrant across a redirect round-trip (e.g. email confirmation)."""
    return Action(type=SET_PENDING_REGISTRATION, payload={"name": name, "email": email})


def clear_pending_registration() -> Action:
    return Action(type=CLEAR_PENDING_REGISTRATION)


# ---------------------------------------------------------------------------
# Synchronous blog mutations
# ---------------------------------------------------------------------------


def clear_blog_error() -> Action:
    return Action(type=BLOG_CLEAR_ERROR)


def clear_blog_success() -> Action:
    return Action(type=BLOG_CLEAR_SUCCESS)


def clear_single_blog() -> Action:
    return Action(type=CLEAR_SINGLE_BLOG)


def reset_blog_state() -> Action:
    return Action(type=RESET_BLOG_STATE)
