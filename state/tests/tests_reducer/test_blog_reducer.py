"""
Blog Reducer -- List Maintenance Tests

Covers:
  - add prepends without a re-fetch
  - update merges into list entry and focused single blog
  - delete filters the list and the focused blog
  - fetch stores data and total verbatim, page from the argument
  - stale ids are silent no-ops
  - clear / reset actions
"""

import copy

from state.actions import (
    clear_blog_error,
    clear_blog_success,
    clear_single_blog,
    fulfilled,
    pending,
    rejected,
    reset_blog_state,
)
from state.blog_reducer import (
    ADD_BLOG_SUCCESS,
    DELETE_BLOG_SUCCESS,
    UPDATE_BLOG_SUCCESS,
    empty_blog_state,
    reduce_blog,
)
from state.types import (
    ADD_BLOG,
    DELETE_BLOG,
    FETCH_ALL_BLOGS,
    FETCH_BLOGS_BY_AUTHOR,
    FETCH_SINGLE_BLOG,
    UPDATE_BLOG,
)


class TestAddBlog:
    def test_prepends(self, blog_state, make_blog):
        after = reduce_blog(blog_state, fulfilled(ADD_BLOG, make_blog("b9", title="New")))
        assert [b["id"] for b in after["blogs"]] == ["b9", "b1", "b2"]
        assert after["success"] == ADD_BLOG_SUCCESS
        assert after["loading"] is False

    def test_rejected_leaves_list_unchanged(self, blog_state):
        after = reduce_blog(blog_state, rejected(ADD_BLOG, "Please fill in all fields."))
        assert after["blogs"] == blog_state["blogs"]
        assert after["error"] == "Please fill in all fields."


class TestUpdateBlog:
    def test_merges_into_list_and_single(self, blog_state, make_image):
        payload = {"id": "b1", "title": "Edited", "content": "New body", "images": [make_image("i3", "b1", 0)]}
        action = fulfilled(UPDATE_BLOG, payload, {"blog_id": "b1", "removed_image_ids": ["i1"]})

        after = reduce_blog(blog_state, action)

        for blog in (after["blogs"][0], after["single_blog"]):
            assert blog["title"] == "Edited"
            assert blog["content"] == "New body"
            assert [img["id"] for img in blog["images"]] == ["i2", "i3"]
            # Fields absent from the payload are kept
            assert blog["author_name"] == "Ann"
            assert len(blog["comments"]) == 2
        assert after["success"] == UPDATE_BLOG_SUCCESS

    def test_unknown_blog_is_noop(self, blog_state):
        action = fulfilled(UPDATE_BLOG, {"id": "gone", "title": "x", "content": "y", "images": []})
        after = reduce_blog(blog_state, action)
        assert after["blogs"] == blog_state["blogs"]
        assert after["single_blog"] == blog_state["single_blog"]


class TestDeleteBlog:
    def test_filters_list_and_single(self, blog_state):
        after = reduce_blog(blog_state, fulfilled(DELETE_BLOG, "b1"))
        assert [b["id"] for b in after["blogs"]] == ["b2"]
        assert after["single_blog"] is None
        assert after["success"] == DELETE_BLOG_SUCCESS

    def test_unknown_id_is_noop(self, blog_state):
        after = reduce_blog(blog_state, fulfilled(DELETE_BLOG, "nope"))
        assert after["blogs"] == blog_state["blogs"]


class TestFetch:
    def test_fetch_all_stores_total_verbatim(self, make_blog):
        state = reduce_blog(empty_blog_state(), pending(FETCH_ALL_BLOGS, {"page": 2, "per_page": 10}))
        assert state["loading"] is True
        data = [make_blog(str(i)) for i in range(10)]
        after = reduce_blog(state, fulfilled(FETCH_ALL_BLOGS, {"data": data, "total": 25}, {"page": 2, "per_page": 10}))
        assert after["total"] == 25
        assert after["current_page"] == 2
        assert after["per_page"] == 10
        assert len(after["blogs"]) == 10
        assert after["loading"] is False

    def test_fetch_by_author_replaces_list(self, blog_state, make_blog):
        action = fulfilled(FETCH_BLOGS_BY_AUTHOR, {"data": [make_blog("b7")], "total": 1}, {"author_id": "u1"})
        after = reduce_blog(blog_state, action)
        assert [b["id"] for b in after["blogs"]] == ["b7"]
        assert after["total"] == 1
        assert after["current_page"] == 1

    def test_fetch_rejected(self):
        after = reduce_blog(empty_blog_state(), rejected(FETCH_ALL_BLOGS, "timeout"))
        assert after["error"] == "timeout"
        assert after["loading"] is False

    def test_single_blog_flags(self, make_blog):
        state = reduce_blog(empty_blog_state(), pending(FETCH_SINGLE_BLOG, "b1"))
        assert state["loading_single_blog"] is True
        assert state["loading"] is False
        after = reduce_blog(state, fulfilled(FETCH_SINGLE_BLOG, make_blog("b1")))
        assert after["single_blog"]["id"] == "b1"
        assert after["loading_single_blog"] is False

    def test_single_blog_not_found(self):
        after = reduce_blog(empty_blog_state(), rejected(FETCH_SINGLE_BLOG, "Blog not found"))
        assert after["error"] == "Blog not found"
        assert after["single_blog"] is None


class TestSynchronous:
    def test_clear_error_and_success_when_null_are_noops(self):
        state = empty_blog_state()
        assert reduce_blog(state, clear_blog_error()) is state
        assert reduce_blog(state, clear_blog_success()) is state

    def test_clear_single_blog(self, blog_state):
        after = reduce_blog(blog_state, clear_single_blog())
        assert after["single_blog"] is None
        assert after["blogs"] == blog_state["blogs"]

    def test_reset(self, blog_state):
        blog_state["error"] = "e"
        blog_state["success"] = "s"
        blog_state["loading_single_blog"] = True
        after = reduce_blog(blog_state, reset_blog_state())
        assert after["single_blog"] is None
        assert after["error"] is None
        assert after["success"] is None
        assert after["loading_single_blog"] is False
        assert len(after["blogs"]) == 2

    def test_input_not_modified(self, blog_state):
        before = copy.deepcopy(blog_state)
        reduce_blog(blog_state, fulfilled(DELETE_BLOG, "b1"))
        assert blog_state == before
