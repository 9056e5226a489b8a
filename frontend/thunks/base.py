"""
Async action pipeline - thunk machinery.

A thunk wraps one logical user intent. Calling it dispatches a pending
action before any side effect, runs the body, then dispatches exactly one
terminal action: fulfilled with the body's return value, or rejected with a
reason string. The terminal action is also returned to the caller. No
exception escapes a thunk.

Bodies raise Rejected for validation and authorization failures; gateway
and image errors are converted to rejections with their own message.
"""

from __future__ import annotations

import functools
import logging
import uuid
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

from frontend.config import Settings
from frontend.gateway import Gateway, GatewayError
from frontend.repos import BlogRepo, CommentRepo, ImageRepo, UserRepo
from frontend.services.images import ImageError
from state.actions import fulfilled, pending, rejected
from state.store import Store
from state.types import Action

logger = logging.getLogger(__name__)


class Rejected(Exception):
    """Raised inside a thunk body to resolve the operation as rejected."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


@dataclass
class ThunkContext:
    """Everything a thunk body may touch. Built by the composition root."""

    gateway: Gateway
    store: Store
    settings: Settings

    @functools.cached_property
    def users(self) -> UserRepo:
        return UserRepo(self.gateway)

    @functools.cached_property
    def blogs(self) -> BlogRepo:
        return BlogRepo(self.gateway)

    @functools.cached_property
    def images(self) -> ImageRepo:
        return ImageRepo(self.gateway)

    @functools.cached_property
    def comments(self) -> CommentRepo:
        return CommentRepo(self.gateway)


ThunkBody = Callable[[ThunkContext, Any], Awaitable[Any]]
Thunk = Callable[..., Awaitable[Action]]


def _meta_arg(arg: Any) -> Any:
    """The thunk argument as recorded on actions. Passwords never travel."""
    if isinstance(arg, BaseModel):
        arg = arg.model_dump(exclude_none=True)
    if isinstance(arg, dict) and "password" in arg:
        arg = {k: v for k, v in arg.items() if k != "password"}
    return arg


def _validation_reason(e: ValidationError) -> str:
    first = e.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"Invalid {location}: {first['msg']}" if location else first["msg"]


def create_async_thunk(type_prefix: str) -> Callable[[ThunkBody], Thunk]:
    """
    Turn an async body into a thunk dispatching under `type_prefix`.

    Usage:
        @create_async_thunk("blog/addBlog")
        async def add_blog(ctx: ThunkContext, arg) -> dict:
            ...

        action = await add_blog(ctx, {"title": "T", ...})
    """

    def decorator(body: ThunkBody) -> Thunk:
        @functools.wraps(body)
        async def thunk(ctx: ThunkContext, arg: Any = None) -> Action:
            request_id = uuid.uuid4().hex
            meta_arg = _meta_arg(arg)
            ctx.store.dispatch(pending(type_prefix, meta_arg, request_id=request_id))
            logger.info("%s dispatched (request %s)", type_prefix, request_id)

            try:
                payload = await body(ctx, arg)
            except Rejected as e:
                reason = e.reason
            except GatewayError as e:
                reason = e.message
            except ImageError as e:
                reason = str(e)
            except ValidationError as e:
                reason = _validation_reason(e)
            except Exception as e:
                logger.exception("%s failed unexpectedly", type_prefix)
                reason = str(e) or type(e).__name__
            else:
                logger.info("%s fulfilled (request %s)", type_prefix, request_id)
                return ctx.store.dispatch(fulfilled(type_prefix, payload, meta_arg, request_id=request_id))

            logger.warning("%s rejected: %s", type_prefix, reason)
            return ctx.store.dispatch(rejected(type_prefix, reason, meta_arg, request_id=request_id))

        thunk.type_prefix = type_prefix  # type: ignore[attr-defined]
        return thunk

    return decorator
