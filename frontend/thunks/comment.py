"""
Comment operations: add, edit, delete.

Writes are followed by a read through the joined comment view; the
fulfilled comment always carries author fields as the view reports them.
Ownership is enforced by the backend: updates and deletes carry an owner
filter, and a write that matches no rows is reported, never assumed done.
"""

from __future__ import annotations

import logging
from typing import Any

from frontend.models import AddCommentRequest, DeleteCommentRequest, EditCommentRequest, PendingImage
from frontend.services import images
from frontend.thunks.base import Rejected, ThunkContext, create_async_thunk
from state.types import ADD_COMMENT, DELETE_COMMENT, EDIT_COMMENT

logger = logging.getLogger(__name__)

COMMENT_EMPTY = "Comment cannot be empty"
COMMENT_NOT_FOUND = "Comment not found"
IMAGE_CONFLICT = "Choose either a new image or removing the current one, not both."
NOT_AUTHORIZED_EDIT = "You are not authorized to edit this comment"
NOT_AUTHORIZED_DELETE = "You can only delete your own comments"
DELETE_BLOCKED = "Delete was blocked by the server"


async def _encode_comment_image(ctx: ThunkContext, image: PendingImage) -> str:
    settings = ctx.settings
    data_url = await images.encode_compressed(image, settings.IMAGE_MAX_WIDTH, settings.image_quality_percent)
    return images.ensure_within(data_url, settings.COMMENT_IMAGE_MAX_CHARS)


@create_async_thunk(ADD_COMMENT)
async def add_comment(ctx: ThunkContext, arg: Any) -> dict[str, Any]:
    req = AddCommentRequest.model_validate(arg)
    content = req.content.strip()
    if not content and req.file is None:
        raise Rejected(COMMENT_EMPTY)

    image = await _encode_comment_image(ctx, req.file) if req.file is not None else None

    comment_id = await ctx.comments.create(req.blog_id, req.user_id, content, image)
    return await ctx.comments.get_detail(comment_id)


@create_async_thunk(EDIT_COMMENT)
async def edit_comment(ctx: ThunkContext, arg: Any) -> dict[str, Any]:
    """
    Update content and, optionally, the image of a comment.

    The image field is omitted from the update unless a replacement file or
    removal was requested. A comment left with neither text nor image is
    rejected.
    """
    req = EditCommentRequest.model_validate(arg)
    if req.file is not None and req.remove_image:
        raise Rejected(IMAGE_CONFLICT)
    content = req.content.strip()
    if not content and (req.remove_image or req.file is None):
        if req.remove_image:
            raise Rejected(COMMENT_EMPTY)
        current = await ctx.comments.get_detail_or_none(req.comment_id)
        if current is None:
            raise Rejected(COMMENT_NOT_FOUND)
        if not current["image"]:
            raise Rejected(COMMENT_EMPTY)

    values: dict[str, Any] = {"content": content}
    if req.file is not None:
        values["image"] = await _encode_comment_image(ctx, req.file)
    elif req.remove_image:
        values["image"] = None

    updated = await ctx.comments.update(req.comment_id, req.user_id, values)
    if updated == 0:
        owner = await ctx.comments.get_owner(req.comment_id)
        if owner is None:
            raise Rejected(COMMENT_NOT_FOUND)
        logger.warning("User %s tried to edit comment %s owned by %s", req.user_id, req.comment_id, owner)
        raise Rejected(NOT_AUTHORIZED_EDIT)

    return await ctx.comments.get_detail(req.comment_id)


@create_async_thunk(DELETE_COMMENT)
async def delete_comment(ctx: ThunkContext, arg: Any) -> dict[str, Any]:
    """
    Delete a comment after checking its stored owner.

    The ownership check reads the backend, not local state. A delete that
    then removes nothing gets its own reason: the row existed a moment ago,
    so the backend refused it.
    """
    req = DeleteCommentRequest.model_validate(arg)

    owner = await ctx.comments.get_owner(req.comment_id)
    if owner is None:
        raise Rejected(COMMENT_NOT_FOUND)
    if owner != req.user_id:
        logger.warning("User %s tried to delete comment %s owned by %s", req.user_id, req.comment_id, owner)
        raise Rejected(NOT_AUTHORIZED_DELETE)

    deleted = await ctx.comments.delete(req.comment_id, req.user_id)
    if deleted == 0:
        raise Rejected(DELETE_BLOCKED)

    return {"comment_id": req.comment_id, "blog_id": req.blog_id}
