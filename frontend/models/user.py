"""User models for registration and login."""

from __future__ import annotations

from pydantic import BaseModel

from frontend.models.image import PendingImage


class User(BaseModel):
    """Profile row. `id` is the auth identity id the profile is keyed to."""

    id: str
    name: str
    email: str
    image: str | None = None  # inline data URL
    created_at: str | None = None


class RegisterRequest(BaseModel):
    """What the caller passes to the register operation."""

    name: str = ""
    email: str = ""
    password: str = ""
    image: PendingImage | None = None


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""
