"""
Blog State - Auth Reducer

Pure function: (state, action) → state
No side effects. No IO. Deterministic.

The input state is never modified. Unknown actions return the input state
object itself, so callers can detect a no-op by identity.
"""

from __future__ import annotations

import copy
from typing import Any

from state.types import (
    AUTH_CLEAR_ERROR,
    AUTH_CLEAR_SUCCESS,
    CLEAR_PENDING_REGISTRATION,
    FULFILLED,
    LOGIN_USER,
    LOGOUT,
    LOGOUT_USER,
    PENDING,
    REGISTER_USER,
    REJECTED,
    SET_PENDING_REGISTRATION,
    SET_RESTORING,
    SET_USER,
    Action,
)

REGISTER_SUCCESS = "Successfully registered!"
LOGIN_SUCCESS = "Successfully logged in!"
LOGOUT_SUCCESS = "Successfully logged out."

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def empty_auth_state() -> dict[str, Any]:
    """
    The auth slice before anything has happened.
    `restoring` stays True until the first session recovery attempt resolves.
    """
    return {
        "user": None,
        "loading": False,
        "error": None,
        "success": None,
        "restoring": True,
        "pending_registration": None,
    }


def reduce_auth(state: dict[str, Any], action: Action) -> dict[str, Any]:
    """Apply one action to the auth slice and return the next state."""
    handler = _HANDLERS.get(action.type)
    if handler is None:
        return state
    return handler(state, action)


# ---------------------------------------------------------------------------
# Async outcome handlers
# ---------------------------------------------------------------------------


def _on_pending(state: dict, action: Action) -> dict:
    snap = copy.deepcopy(state)
    snap["loading"] = True
    snap["error"] = None
    return snap


def _on_rejected(state: dict, action: Action) -> dict:
    snap = copy.deepcopy(state)
    snap["loading"] = False
    snap["error"] = action.payload
    return snap


def _on_register_fulfilled(state: dict, action: Action) -> dict:
    snap = copy.deepcopy(state)
    snap["loading"] = False
    snap["user"] = action.payload
    snap["success"] = REGISTER_SUCCESS
    snap["pending_registration"] = None
    return snap


def _on_login_fulfilled(state: dict, action: Action) -> dict:
    snap = copy.deepcopy(state)
    snap["loading"] = False
    snap["user"] = action.payload
    snap["success"] = LOGIN_SUCCESS
    return snap


def _on_logout_pending(state: dict, action: Action) -> dict:
    # Local user is dropped before the remote sign-out resolves.
    snap = copy.deepcopy(state)
    snap["loading"] = True
    snap["error"] = None
    snap["user"] = None
    return snap


def _on_logout_fulfilled(state: dict, action: Action) -> dict:
    snap = copy.deepcopy(state)
    snap["loading"] = False
    snap["success"] = LOGOUT_SUCCESS
    return snap


# ---------------------------------------------------------------------------
# Synchronous handlers
# ---------------------------------------------------------------------------


def _set_user(state: dict, action: Action) -> dict:
    snap = copy.deepcopy(state)
    snap["user"] = action.payload
    return snap


def _logout(state: dict, action: Action) -> dict:
    if state["user"] is None:
        return state
    snap = copy.deepcopy(state)
    snap["user"] = None
    return snap


def _clear_field(name: str):
    def handler(state: dict, action: Action) -> dict:
        if state[name] is None:
            return state
        snap = copy.deepcopy(state)
        snap[name] = None
        return snap

    return handler


def _set_restoring(state: dict, action: Action) -> dict:
    snap = copy.deepcopy(state)
    snap["restoring"] = bool(action.payload)
    return snap


def _set_pending_registration(state: dict, action: Action) -> dict:
    snap = copy.deepcopy(state)
    snap["pending_registration"] = {
        "name": action.payload["name"],
        "email": action.payload["email"],
    }
    return snap


# ---------------------------------------------------------------------------
# Handler registry
# ---------------------------------------------------------------------------

_HANDLERS: dict[str, Any] = {
    f"{REGISTER_USER}/{PENDING}": _on_pending,
    f"{REGISTER_USER}/{FULFILLED}": _on_register_fulfilled,
    f"{REGISTER_USER}/{REJECTED}": _on_rejected,
    f"{LOGIN_USER}/{PENDING}": _on_pending,
    f"{LOGIN_USER}/{FULFILLED}": _on_login_fulfilled,
    f"{LOGIN_USER}/{REJECTED}": _on_rejected,
    f"{LOGOUT_USER}/{PENDING}": _on_logout_pending,
    f"{LOGOUT_USER}/{FULFILLED}": _on_logout_fulfilled,
    f"{LOGOUT_USER}/{REJECTED}": _on_rejected,
    SET_USER: _set_user,
    LOGOUT: _logout,
    AUTH_CLEAR_ERROR: _clear_field("error"),
    AUTH_CLEAR_SUCCESS: _clear_field("success"),
    SET_RESTORING: _set_restoring,
    SET_PENDING_REGISTRATION: _set_pending_registration,
    CLEAR_PENDING_REGISTRATION: _clear_field("pending_registration"),
}
