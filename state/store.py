"""
Blog State - Store

Holds the two slices (auth, blog) and applies actions through the reducers.
Owned by the application's composition root and passed to whoever needs it;
there is no module-level store instance.

The store is not thread-safe. All dispatches happen on one event loop.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from state.auth_reducer import empty_auth_state, reduce_auth
from state.blog_reducer import empty_blog_state, reduce_blog
from state.types import Action

logger = logging.getLogger(__name__)

Reducer = Callable[[dict[str, Any], Action], dict[str, Any]]
Listener = Callable[[dict[str, Any], Action], None]

SLICE_REDUCERS: dict[str, Reducer] = {
    "auth": reduce_auth,
    "blog": reduce_blog,
}


def initial_state(per_page: int | None = None) -> dict[str, Any]:
    """Root state with both slices empty."""
    blog = empty_blog_state() if per_page is None else empty_blog_state(per_page)
    return {"auth": empty_auth_state(), "blog": blog}


def combine(state: dict[str, Any], action: Action) -> dict[str, Any]:
    """
    Root reducer. Every slice sees every action.
    Returns the input state object when no slice changed.
    """
    changed = False
    next_state: dict[str, Any] = {}
    for name, reducer in SLICE_REDUCERS.items():
        before = state[name]
        after = reducer(before, action)
        next_state[name] = after
        if after is not before:
            changed = True
    return next_state if changed else state


class Store:
    """Mutable holder for the root state. Mutation only through dispatch()."""

    def __init__(self, state: dict[str, Any] | None = None) -> None:
        self._state = state if state is not None else initial_state()
        self._listeners: list[Listener] = []

    def get_state(self) -> dict[str, Any]:
        return self._state

    @property
    def auth(self) -> dict[str, Any]:
        return self._state["auth"]

    @property
    def blog(self) -> dict[str, Any]:
        return self._state["blog"]

    def dispatch(self, action: Action) -> Action:
        """
        Apply an action and notify listeners if the state changed.
        Returns the action so callers can chain on it.

        A failing listener is logged and skipped; the remaining listeners
        still run and the action is still returned.
        """
        next_state = combine(self._state, action)
        if next_state is not self._state:
            self._state = next_state
            for listener in list(self._listeners):
                try:
                    listener(self._state, action)
                except Exception:
                    logger.exception("Store listener failed on %s", action.type)
        return action

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a change listener.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
