"""
Blog operations: add, update, delete, fetch.

Multi-step writes run their gateway calls in a fixed order and stop at the
first failure. Steps that already committed stay committed.
"""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Any

from frontend.gateway import GatewayError
from frontend.models import (
    AddBlogRequest,
    Blog,
    FetchBlogsRequest,
    PendingImage,
    UpdateBlogRequest,
)
from frontend.services import images
from frontend.thunks.base import Rejected, ThunkContext, create_async_thunk
from state.types import (
    ADD_BLOG,
    DELETE_BLOG,
    FETCH_ALL_BLOGS,
    FETCH_BLOGS_BY_AUTHOR,
    FETCH_SINGLE_BLOG,
    UPDATE_BLOG,
)

logger = logging.getLogger(__name__)

FILL_ALL_FIELDS = "Please fill in all fields."
BLOG_NOT_FOUND = "Blog not found"
TOO_MANY_IMAGES = "You can attach at most {limit} images."
AUTHOR_REQUIRED = "An author is required to list their blogs."
LOGIN_REQUIRED = "You must be logged in to post."
IMAGE_REMOVAL_BLOCKED = "Some images could not be removed"


def total_pages(total: int, per_page: int) -> int:
    """Number of pages needed to show `total` rows, at least 1."""
    if per_page <= 0:
        return 1
    return max(1, math.ceil(total / per_page))


async def _encode_all(ctx: ThunkContext, pending: list[PendingImage]) -> list[tuple[str, str]]:
    settings = ctx.settings
    encoded = []
    for image in pending:
        data_url = await images.encode_compressed(image, settings.IMAGE_MAX_WIDTH, settings.image_quality_percent)
        encoded.append((data_url, image.alt_text))
    return encoded


async def _hydrate(ctx: ThunkContext, blog: dict[str, Any]) -> dict[str, Any]:
    """Attach images, comments and author display fields to a blog row."""
    blog_images, comments, (author_name, author_avatar) = await asyncio.gather(
        ctx.images.list_for_blog(blog["id"]),
        ctx.comments.list_for_blog(blog["id"]),
        ctx.users.get_author(blog["author_id"]),
    )
    hydrated = Blog(
        **blog,
        images=blog_images,
        comments=comments,
        author_name=author_name,
        author_avatar=author_avatar,
    )
    return hydrated.model_dump()


@create_async_thunk(ADD_BLOG)
async def add_blog(ctx: ThunkContext, arg: Any) -> dict[str, Any]:
    """
    Encode the pending images, insert the blog row, then its images tagged
    with the new id. An unreadable image rejects before anything is written.

    If the image insert fails the blog row stays persisted without images
    and the operation rejects with the image step's reason.
    """
    req = AddBlogRequest.model_validate(arg)
    title, content = req.title.strip(), req.content.strip()
    if not title or not content:
        raise Rejected(FILL_ALL_FIELDS)
    if not req.author_id:
        raise Rejected(LOGIN_REQUIRED)
    if len(req.images) > ctx.settings.MAX_POST_IMAGES:
        raise Rejected(TOO_MANY_IMAGES.format(limit=ctx.settings.MAX_POST_IMAGES))

    encoded = await _encode_all(ctx, req.images)
    blog = await ctx.blogs.create(title, content, req.author_id)

    try:
        inserted = await ctx.images.insert_many(blog["id"], encoded)
    except GatewayError:
        logger.warning("Blog %s was saved but its images were not", blog["id"])
        raise

    return Blog(**blog, images=inserted).model_dump()


@create_async_thunk(UPDATE_BLOG)
async def update_blog(ctx: ThunkContext, arg: Any) -> dict[str, Any]:
    """
    Update text, then remove images, then insert new images. New images are
    encoded before the first write. If the backend removes fewer images than
    requested the operation rejects and no new images are inserted.

    Returns only what changed: title, content and the newly inserted images.
    The caller merges that into what it already holds.
    """
    req = UpdateBlogRequest.model_validate(arg)
    title, content = req.title.strip(), req.content.strip()
    if not title or not content:
        raise Rejected(FILL_ALL_FIELDS)

    encoded = await _encode_all(ctx, req.new_images)
    blog = await ctx.blogs.update(req.blog_id, title, content)

    if req.removed_image_ids:
        removed = await ctx.images.delete_ids(req.removed_image_ids)
        if removed < len(req.removed_image_ids):
            logger.warning(
                "Removed only %d of %d images from blog %s", removed, len(req.removed_image_ids), req.blog_id
            )
            raise Rejected(IMAGE_REMOVAL_BLOCKED)

    inserted = await ctx.images.insert_many(req.blog_id, encoded)

    return {"id": blog["id"], "title": blog["title"], "content": blog["content"], "images": inserted}


@create_async_thunk(DELETE_BLOG)
async def delete_blog(ctx: ThunkContext, arg: Any) -> str:
    """Delete comments, then images, then the blog row. Returns the blog id."""
    blog_id = str(arg["blog_id"] if isinstance(arg, dict) else arg)

    await ctx.comments.delete_for_blog(blog_id)
    await ctx.images.delete_for_blog(blog_id)
    await ctx.blogs.delete(blog_id)

    return blog_id


@create_async_thunk(FETCH_ALL_BLOGS)
async def fetch_all_blogs(ctx: ThunkContext, arg: Any = None) -> dict[str, Any]:
    req = FetchBlogsRequest.model_validate(arg or {"per_page": ctx.settings.DEFAULT_PER_PAGE})
    rows, total = await ctx.blogs.list_page(req.page, req.per_page)
    data = await asyncio.gather(*(_hydrate(ctx, row) for row in rows))
    return {"data": list(data), "total": total}


@create_async_thunk(FETCH_BLOGS_BY_AUTHOR)
async def fetch_blogs_by_author(ctx: ThunkContext, arg: Any) -> dict[str, Any]:
    """One page of a single author's blogs, hydrated like the full list."""
    req = FetchBlogsRequest.model_validate(arg)
    if not req.author_id:
        raise Rejected(AUTHOR_REQUIRED)
    rows, total = await ctx.blogs.list_by_author(req.author_id, req.page, req.per_page)
    data = await asyncio.gather(*(_hydrate(ctx, row) for row in rows))
    return {"data": list(data), "total": total}


@create_async_thunk(FETCH_SINGLE_BLOG)
async def fetch_single_blog(ctx: ThunkContext, arg: Any) -> dict[str, Any]:
    blog_id = str(arg["blog_id"] if isinstance(arg, dict) else arg)
    blog = await ctx.blogs.get(blog_id)
    if blog is None:
        raise Rejected(BLOG_NOT_FOUND)
    return await _hydrate(ctx, blog)
