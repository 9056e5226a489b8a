"""
State layer test configuration.

Fixtures build plain dict blogs and comments the way the thunks put them
into the store (model_dump output).
"""

import pytest

from state.blog_reducer import empty_blog_state


def _comment(comment_id: str, blog_id: str, user_id: str = "u1", content: str = "nice") -> dict:
    return {
        "id": comment_id,
        "blog_id": blog_id,
        "user_id": user_id,
        "content": content,
        "image": None,
        "created_at": "2026-01-01T00:00:00Z",
        "author_name": "Ann",
        "author_avatar": None,
    }


def _blog(blog_id: str, title: str = "Title", images: list | None = None, comments: list | None = None) -> dict:
    return {
        "id": blog_id,
        "title": title,
        "content": "Body",
        "author_id": "u1",
        "created_at": "2026-01-01T00:00:00Z",
        "images": images or [],
        "comments": comments or [],
        "author_name": "Ann",
        "author_avatar": None,
    }


def _image(image_id: str, blog_id: str, sort_order: int = 0) -> dict:
    return {
        "id": image_id,
        "blog_id": blog_id,
        "image_path": f"data:image/jpeg;base64,{image_id}",
        "alt_text": "",
        "sort_order": sort_order,
    }


@pytest.fixture
def blog_state():
    """Blog slice holding two blogs, the first focused as single blog."""
    state = empty_blog_state()
    first = _blog(
        "b1",
        images=[_image("i1", "b1", 0), _image("i2", "b1", 1)],
        comments=[_comment("c1", "b1"), _comment("c2", "b1", user_id="u2")],
    )
    state["blogs"] = [first, _blog("b2", title="Second")]
    state["single_blog"] = _blog(
        "b1",
        images=[_image("i1", "b1", 0), _image("i2", "b1", 1)],
        comments=[_comment("c1", "b1"), _comment("c2", "b1", user_id="u2")],
    )
    state["total"] = 2
    return state


@pytest.fixture
def make_blog():
    return _blog


@pytest.fixture
def make_comment():
    return _comment


@pytest.fixture
def make_image():
    return _image
