"""
Auth operations: register, login, logout, session restore.

Profiles are keyed to the auth identity id. Register and login are two-step
(auth call, then profile row) and are not transactional: a failure in the
second step leaves an auth identity without a profile. That inconsistency
is reported as a rejection, never compensated here.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from frontend.gateway import GatewayError
from frontend.models import LoginRequest, RegisterRequest
from frontend.services import images
from frontend.thunks.base import Rejected, ThunkContext, create_async_thunk
from state.actions import set_restoring, set_user
from state.types import LOGIN_USER, LOGOUT_USER, REGISTER_USER

logger = logging.getLogger(__name__)

ALL_FIELDS_REQUIRED = "All fields required"
INVALID_EMAIL = "Please enter a valid email address."
EMAIL_TAKEN = "This email is already registered."
LOGIN_FIELDS_REQUIRED = "Email and password are required"
PROFILE_NOT_FOUND = "User profile not found"


@create_async_thunk(REGISTER_USER)
async def register_user(ctx: ThunkContext, arg: Any) -> dict[str, Any]:
    """
    Sign up an identity, then insert its profile row.

    Validation happens before any gateway call.
    """
    req = RegisterRequest.model_validate(arg)
    name, email = req.name.strip(), req.email.strip()
    if not name or not email or not req.password:
        raise Rejected(ALL_FIELDS_REQUIRED)
    if not re.match(ctx.settings.EMAIL_PATTERN, email):
        raise Rejected(INVALID_EMAIL)

    if await ctx.users.email_taken(email):
        raise Rejected(EMAIL_TAKEN)

    session = await ctx.gateway.sign_up(email, req.password)

    avatar = await images.encode(req.image) if req.image is not None else None

    try:
        return await ctx.users.create(session.user_id, name, email, avatar)
    except GatewayError:
        logger.warning("Auth identity %s was created but its profile insert failed", session.user_id)
        raise


@create_async_thunk(LOGIN_USER)
async def login_user(ctx: ThunkContext, arg: Any) -> dict[str, Any]:
    req = LoginRequest.model_validate(arg)
    email = req.email.strip()
    if not email or not req.password:
        raise Rejected(LOGIN_FIELDS_REQUIRED)

    session = await ctx.gateway.sign_in_with_password(email, req.password)

    profile = await ctx.users.get(session.user_id)
    if profile is None:
        logger.warning("Auth identity %s signed in without a profile row", session.user_id)
        raise Rejected(PROFILE_NOT_FOUND)
    return profile


@create_async_thunk(LOGOUT_USER)
async def logout_user(ctx: ThunkContext, arg: Any = None) -> None:
    """
    The local user is cleared on pending. A failing remote sign-out is
    reported as a rejection but does not bring the user back.
    """
    await ctx.gateway.sign_out()
    return None


async def restore_session(ctx: ThunkContext) -> dict[str, Any] | None:
    """
    Recover the user of a session the backend still holds.

    Always ends by clearing the restoring flag. Gateway failures are logged
    and swallowed: a failed restore means "nobody is logged in".

    Returns:
        The restored user fields, or None
    """
    user = None
    try:
        session = await ctx.gateway.get_session()
        if session is not None:
            user = await ctx.users.get(session.user_id)
            if user is not None:
                ctx.store.dispatch(set_user(user))
    except GatewayError as e:
        logger.warning("Failed to restore user: %s", e.message)
    finally:
        ctx.store.dispatch(set_restoring(False))
    return user
