"""Store: root reducer, dispatch and listeners."""

import logging

import pytest

from state.actions import clear_auth_error, fulfilled, rejected, set_user
from state.store import Store, combine, initial_state
from state.types import ADD_BLOG, LOGIN_USER, Action, ActionRejected


def test_initial_state_has_both_slices():
    state = initial_state(per_page=12)
    assert state["auth"]["user"] is None
    assert state["auth"]["restoring"] is True
    assert state["blog"]["per_page"] == 12
    assert state["blog"]["current_page"] == 1


def test_combine_returns_same_object_when_unchanged():
    state = initial_state()
    assert combine(state, clear_auth_error()) is state


def test_dispatch_routes_to_slice():
    store = Store()
    store.dispatch(set_user({"id": "u1", "name": "Ann"}))
    assert store.auth["user"]["id"] == "u1"
    assert store.blog["blogs"] == []


def test_dispatch_returns_the_action():
    store = Store()
    action = rejected(ADD_BLOG, "bad")
    assert store.dispatch(action) is action


def test_listener_notified_only_on_change():
    store = Store()
    seen = []
    store.subscribe(lambda state, action: seen.append(action.type))

    store.dispatch(clear_auth_error())
    store.dispatch(rejected(LOGIN_USER, "bad"))

    assert seen == ["auth/loginUser/rejected"]


def test_unsubscribe():
    store = Store()
    seen = []
    unsubscribe = store.subscribe(lambda state, action: seen.append(action))
    unsubscribe()
    unsubscribe()
    store.dispatch(set_user({"id": "u1"}))
    assert seen == []


def test_failing_listener_does_not_stop_dispatch(caplog):
    store = Store()
    seen = []

    def broken(state, action):
        raise OSError("disk full")

    store.subscribe(broken)
    store.subscribe(lambda state, action: seen.append(action.type))

    with caplog.at_level(logging.ERROR, logger="state.store"):
        action = store.dispatch(set_user({"id": "u1"}))

    assert action.type == "auth/setUser"
    assert store.auth["user"]["id"] == "u1"
    assert seen == ["auth/setUser"]
    assert "Store listener failed on auth/setUser" in caplog.text


class TestAction:
    def test_prefix_and_outcome(self):
        action = fulfilled(ADD_BLOG, {"id": "1"})
        assert action.prefix == ADD_BLOG
        assert action.outcome == "fulfilled"
        assert action.is_fulfilled
        assert action.meta["request_id"]

    def test_synchronous_action_has_no_outcome(self):
        action = set_user(None)
        assert action.outcome is None
        assert action.prefix == "auth/setUser"

    def test_unwrap_rejected_raises(self):
        with pytest.raises(ActionRejected) as exc:
            rejected(ADD_BLOG, "Please fill in all fields.").unwrap()
        assert exc.value.reason == "Please fill in all fields."

    def test_unwrap_fulfilled(self):
        assert fulfilled(ADD_BLOG, {"id": "1"}).unwrap() == {"id": "1"}

    def test_dict_round_trip(self):
        action = rejected(LOGIN_USER, "nope", {"email": "a@gmail.com"}, request_id="r1")
        assert Action.from_dict(action.to_dict()) == action
